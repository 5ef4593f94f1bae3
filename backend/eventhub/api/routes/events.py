from fastapi import APIRouter, Depends

from eventhub.api.deps import get_ledger
from eventhub.services.ledger import BookingLedger

router = APIRouter()

@router.get("/events")
def list_events(ledger: BookingLedger = Depends(get_ledger)):
    return {"events": [e.to_json() for e in ledger.list_events()]}

@router.get("/events/{event_id}")
def get_event(event_id: str, ledger: BookingLedger = Depends(get_ledger)):
    return {"event": ledger.get_event(event_id).to_json()}
