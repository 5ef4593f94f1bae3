from typing import Any, Optional
from pydantic import Field

from eventhub.schemas.base import CamelModel, UtcDatetime, utcnow


class Event(CamelModel):
    id: str
    title: str
    description: str = ""
    date_time: UtcDatetime
    location: str
    type: str = "General"
    total_tickets: int
    available_tickets: int
    price: float
    image_url: str = ""
    status: str = "active"
    created_at: UtcDatetime = Field(default_factory=utcnow)
    updated_at: UtcDatetime = Field(default_factory=utcnow)

    def snapshot(self, with_image: bool = False) -> dict[str, Any]:
        """Subset of the event embedded in booking responses."""
        data = self.to_json(include={"title", "date_time", "location"})
        if with_image:
            data["imageUrl"] = self.image_url
        return data


class EventCreate(CamelModel):
    """Admin event payload. Required fields are checked by the ledger so the
    client gets a single readable message instead of a field-by-field report."""

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[UtcDatetime] = None
    location: Optional[str] = None
    price: Optional[float] = None
    capacity: Optional[int] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[str] = None
