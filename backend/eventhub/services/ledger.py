"""Event catalogue and booking ledger.

Inventory lives on the event row (``available_tickets``). Requests larger
than the stock already read are rejected up front, but the authoritative
availability check and the decrement are performed together by
``Store.commit_booking``.
"""
import logging
import uuid
from typing import Any, Optional

from eventhub.core.errors import InsufficientTicketsError, NotFoundError, ValidationError
from eventhub.schemas.base import MAX_AMOUNT, MAX_TICKETS, utcnow
from eventhub.schemas.booking import Booking
from eventhub.schemas.event import Event, EventCreate
from eventhub.store.base import Store

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100


class BookingLedger:

    def __init__(self, store: Store):
        self._store = store

    def list_events(self) -> list[Event]:
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def create_booking(self, user_id: str, event_id: Optional[str], quantity: Optional[int], total_amount: Optional[float] = None) -> dict[str, Any]:
        """Book ``quantity`` tickets and return the booking with an event snapshot.

        ``total_amount`` overrides the computed ``price * quantity`` (the
        storefront sends it when it applied fees or discounts).
        """
        if not event_id or quantity is None or quantity < 1:
            raise ValidationError("Event ID and valid quantity are required")
        if total_amount is not None and total_amount < 0:
            raise ValidationError("Total amount cannot be negative")
        event = self.get_event(event_id)
        if quantity > event.available_tickets:
            # can never succeed; also keeps out-of-range integers away from the database
            raise InsufficientTicketsError(event.available_tickets)
        total_price = total_amount if total_amount is not None else event.price * quantity
        if total_price > MAX_AMOUNT:
            raise ValidationError("Total amount is too large")

        booking = Booking(
            id=str(uuid.uuid4()),
            user_id=user_id,
            event_id=event_id,
            quantity=quantity,
            total_price=total_price,
            booking_date=utcnow(),
        )
        event = self._store.commit_booking(booking)
        logger.info(
            "[booking] %s booked %d x %s (%d left)",
            user_id, quantity, event_id, event.available_tickets,
        )
        return {**booking.to_json(), "event": event.snapshot()}

    def list_user_bookings(self, user_id: str) -> list[dict[str, Any]]:
        result = []
        for booking in self._store.list_bookings(user_id=user_id):
            event = self._store.get_event(booking.event_id)
            result.append({
                **booking.to_json(),
                "event": event.snapshot(with_image=True) if event else None,
            })
        return result

    def create_event(self, payload: EventCreate) -> Event:
        if not payload.title or payload.date is None or not payload.location or payload.price is None:
            raise ValidationError("Title, date, location, and price are required")
        if payload.price < 0:
            raise ValidationError("Price cannot be negative")
        if payload.price > MAX_AMOUNT:
            raise ValidationError("Price is too large")
        capacity = payload.capacity if payload.capacity is not None else DEFAULT_CAPACITY
        if capacity < 1:
            raise ValidationError("Capacity must be at least 1")
        if capacity > MAX_TICKETS:
            raise ValidationError("Capacity is too large")
        now = utcnow()
        event = Event(
            id=str(uuid.uuid4()),
            title=payload.title,
            description=payload.description or "",
            date_time=payload.date,
            location=payload.location,
            type=payload.category or "General",
            total_tickets=capacity,
            available_tickets=capacity,
            price=payload.price,
            image_url=payload.image_url or "",
            status=payload.status or "active",
            created_at=now,
            updated_at=now,
        )
        self._store.add_event(event)
        logger.info("[admin] Event created: %s (%s)", event.title, event.id)
        return event
