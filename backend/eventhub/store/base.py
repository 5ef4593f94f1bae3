"""Storage interface shared by the in-memory and SQL backends.

A store is created once per application, opened in the lifespan hook and
closed on shutdown. Handlers reach it through ``eventhub.api.deps.get_store``;
nothing in the package keeps module-level mutable state.

All records cross this boundary as pydantic copies: mutating a returned
record never changes what the store holds.
"""
import abc
from datetime import datetime
from typing import Optional

from eventhub.schemas.booking import Booking
from eventhub.schemas.cart import CartItem
from eventhub.schemas.event import Event
from eventhub.schemas.user import Activity, SessionRecord, User


class Store(abc.ABC):

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    # users

    @abc.abstractmethod
    def add_user(self, user: User) -> User:
        """Insert a user. Raises ConflictError if the email is taken."""

    @abc.abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abc.abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abc.abstractmethod
    def record_login(self, user_id: str, at: datetime) -> User:
        """Bump login_count and set last_login in one step."""

    @abc.abstractmethod
    def list_users(self) -> list[User]: ...

    # events

    @abc.abstractmethod
    def add_event(self, event: Event) -> Event: ...

    @abc.abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]: ...

    @abc.abstractmethod
    def list_events(self) -> list[Event]: ...

    # bookings

    @abc.abstractmethod
    def commit_booking(self, booking: Booking) -> Event:
        """Atomically check availability, decrement it and store the booking.

        Returns the event as it is after the decrement. Raises NotFoundError
        for an unknown event and InsufficientTicketsError (state unchanged)
        when fewer than ``booking.quantity`` tickets remain.
        """

    @abc.abstractmethod
    def list_bookings(self, user_id: Optional[str] = None) -> list[Booking]: ...

    # sessions

    @abc.abstractmethod
    def add_session(self, session: SessionRecord) -> SessionRecord: ...

    @abc.abstractmethod
    def get_session(self, session_id: str) -> Optional[SessionRecord]: ...

    @abc.abstractmethod
    def touch_session(self, session_id: str, at: datetime) -> Optional[SessionRecord]:
        """Update last_activity of an active session; returns the record (active or not)."""

    @abc.abstractmethod
    def deactivate_session(self, session_id: str) -> bool: ...

    @abc.abstractmethod
    def list_sessions(self) -> list[SessionRecord]: ...

    # activity

    @abc.abstractmethod
    def record_activity(self, activity: Activity) -> None: ...

    @abc.abstractmethod
    def list_activity(self, user_id: Optional[str] = None) -> list[Activity]:
        """Activity entries in the order they were recorded."""

    # cart

    @abc.abstractmethod
    def upsert_cart_item(self, item: CartItem) -> CartItem:
        """Store a cart line, one per (user, event).

        If the user already has a line for the event, its quantity, price and
        timestamp are replaced and its id is kept. Returns the stored line.
        """

    @abc.abstractmethod
    def list_cart_items(self, user_id: str) -> list[CartItem]: ...

    @abc.abstractmethod
    def remove_cart_item(self, user_id: str, item_id: str) -> bool: ...
