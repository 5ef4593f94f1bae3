from fastapi import APIRouter, Depends

from eventhub.api.deps import get_current_identity, get_ledger
from eventhub.schemas.auth import Identity
from eventhub.schemas.booking import BookingCreate
from eventhub.services.ledger import BookingLedger

router = APIRouter()

@router.post("/bookings")
def create_booking(payload: BookingCreate, identity: Identity = Depends(get_current_identity), ledger: BookingLedger = Depends(get_ledger)):
    """Book tickets for an event.

    Fails with 400 when fewer tickets remain than requested; in that case
    nothing is stored and the event's availability is untouched.
    """
    booking = ledger.create_booking(identity.user_id, payload.event_id, payload.quantity, payload.total_amount)
    return {"success": True, "booking": booking}

@router.get("/user/bookings")
def my_bookings(identity: Identity = Depends(get_current_identity), ledger: BookingLedger = Depends(get_ledger)):
    return {"bookings": ledger.list_user_bookings(identity.user_id)}
