from typing import Optional
from pydantic import Field

from eventhub.schemas.base import CamelModel, UtcDatetime, utcnow


class CartItem(CamelModel):
    id: str
    user_id: str
    event_id: str
    quantity: int
    price_per_ticket: float
    added_at: UtcDatetime = Field(default_factory=utcnow)


class CartItemCreate(CamelModel):
    event_id: Optional[str] = None
    quantity: Optional[int] = None
    price_per_ticket: Optional[float] = None
