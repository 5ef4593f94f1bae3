from typing import Optional
from pydantic import Field

from eventhub.schemas.base import CamelModel, UtcDatetime, utcnow


class Booking(CamelModel):
    id: str
    user_id: str
    event_id: str
    quantity: int
    total_price: float
    booking_date: UtcDatetime = Field(default_factory=utcnow)
    status: str = "Confirmed"


class BookingCreate(CamelModel):
    event_id: Optional[str] = None
    quantity: Optional[int] = None
    total_amount: Optional[float] = None
