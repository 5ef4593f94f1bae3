import uuid
from typing import Any, Optional

from eventhub.core.errors import NotFoundError, ValidationError
from eventhub.schemas.base import MAX_AMOUNT, MAX_TICKETS, utcnow
from eventhub.schemas.cart import CartItem
from eventhub.store.base import Store


class CartService:
    """Per-user shopping cart. Cart lines do not hold inventory; tickets are
    only taken when the line is turned into a booking."""

    def __init__(self, store: Store):
        self._store = store

    def list_items(self, user_id: str) -> list[dict[str, Any]]:
        items = []
        for item in self._store.list_cart_items(user_id):
            event = self._store.get_event(item.event_id)
            items.append({**item.to_json(), "event": event.to_json() if event else None})
        return items

    def add_item(self, user_id: str, event_id: Optional[str], quantity: Optional[int], price_per_ticket: Optional[float] = None) -> CartItem:
        if not event_id or quantity is None or not 1 <= quantity <= MAX_TICKETS:
            raise ValidationError("Event ID and valid quantity are required")
        event = self._store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        price = price_per_ticket if price_per_ticket is not None else event.price
        if not 0 <= price <= MAX_AMOUNT:
            raise ValidationError("Invalid price per ticket")

        # one line per event: adding the same event again replaces the line
        return self._store.upsert_cart_item(CartItem(
            id=str(uuid.uuid4()),
            user_id=user_id,
            event_id=event_id,
            quantity=quantity,
            price_per_ticket=price,
            added_at=utcnow(),
        ))

    def remove_item(self, user_id: str, item_id: str) -> None:
        if not self._store.remove_cart_item(user_id, item_id):
            raise NotFoundError("Cart item not found")
