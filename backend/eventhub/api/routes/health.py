from fastapi import APIRouter

from eventhub.schemas.base import utcnow

router = APIRouter()

PUBLIC_ENDPOINTS = ["health", "events", "signin", "signup", "bookings"]

@router.get("/health")
def health():
    return {
        "status": "ok",
        "message": "EventHub API is running",
        "timestamp": utcnow().isoformat(),
        "endpoints": PUBLIC_ENDPOINTS,
    }
