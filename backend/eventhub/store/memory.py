import threading
from datetime import datetime
from typing import Optional

from eventhub.core.errors import ConflictError, InsufficientTicketsError, NotFoundError
from eventhub.schemas.booking import Booking
from eventhub.schemas.cart import CartItem
from eventhub.schemas.event import Event
from eventhub.schemas.user import Activity, SessionRecord, User
from eventhub.store.base import Store


class MemoryStore(Store):
    """Process-local store used in development and tests.

    Sync route handlers run on a thread pool, so every read-modify-write
    happens under one re-entrant lock.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._reset()

    def _reset(self) -> None:
        self._users: dict[str, User] = {}
        self._user_emails: dict[str, str] = {}
        self._events: dict[str, Event] = {}
        self._bookings: dict[str, Booking] = {}
        self._sessions: dict[str, SessionRecord] = {}
        self._activity: list[Activity] = []
        self._cart: dict[str, CartItem] = {}

    def close(self) -> None:
        with self._lock:
            self._reset()

    # users

    def add_user(self, user: User) -> User:
        with self._lock:
            if user.email in self._user_emails:
                raise ConflictError("User already exists with this email")
            self._users[user.id] = user.model_copy()
            self._user_emails[user.email] = user.id
        return user.model_copy()

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._user_emails.get(email)
            return self.get_user(user_id) if user_id else None

    def record_login(self, user_id: str, at: datetime) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError("User not found")
            user = user.model_copy(update={"last_login": at, "login_count": user.login_count + 1})
            self._users[user_id] = user
            return user.model_copy()

    def list_users(self) -> list[User]:
        with self._lock:
            return [u.model_copy() for u in self._users.values()]

    # events

    def add_event(self, event: Event) -> Event:
        with self._lock:
            self._events[event.id] = event.model_copy()
        return event.model_copy()

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._lock:
            event = self._events.get(event_id)
            return event.model_copy() if event else None

    def list_events(self) -> list[Event]:
        with self._lock:
            return [e.model_copy() for e in self._events.values()]

    # bookings

    def commit_booking(self, booking: Booking) -> Event:
        with self._lock:
            event = self._events.get(booking.event_id)
            if event is None:
                raise NotFoundError("Event not found")
            if event.available_tickets < booking.quantity:
                raise InsufficientTicketsError(event.available_tickets)
            event = event.model_copy(update={
                "available_tickets": event.available_tickets - booking.quantity,
                "updated_at": booking.booking_date,
            })
            self._events[event.id] = event
            self._bookings[booking.id] = booking.model_copy()
            return event.model_copy()

    def list_bookings(self, user_id: Optional[str] = None) -> list[Booking]:
        with self._lock:
            return [
                b.model_copy() for b in self._bookings.values()
                if user_id is None or b.user_id == user_id
            ]

    # sessions

    def add_session(self, session: SessionRecord) -> SessionRecord:
        with self._lock:
            self._sessions[session.session_id] = session.model_copy()
        return session.model_copy()

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy() if session else None

    def touch_session(self, session_id: str, at: datetime) -> Optional[SessionRecord]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_active:
                session = session.model_copy(update={"last_activity": at})
                self._sessions[session_id] = session
            return session.model_copy()

    def deactivate_session(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or not session.is_active:
                return False
            self._sessions[session_id] = session.model_copy(update={"is_active": False})
            return True

    def list_sessions(self) -> list[SessionRecord]:
        with self._lock:
            return [s.model_copy() for s in self._sessions.values()]

    # activity

    def record_activity(self, activity: Activity) -> None:
        with self._lock:
            self._activity.append(activity.model_copy(deep=True))

    def list_activity(self, user_id: Optional[str] = None) -> list[Activity]:
        with self._lock:
            return [
                a.model_copy(deep=True) for a in self._activity
                if user_id is None or a.user_id == user_id
            ]

    # cart

    def upsert_cart_item(self, item: CartItem) -> CartItem:
        with self._lock:
            existing = next(
                (i for i in self._cart.values() if i.user_id == item.user_id and i.event_id == item.event_id),
                None,
            )
            if existing is not None:
                item = existing.model_copy(update={
                    "quantity": item.quantity,
                    "price_per_ticket": item.price_per_ticket,
                    "added_at": item.added_at,
                })
            self._cart[item.id] = item.model_copy()
        return item.model_copy()

    def list_cart_items(self, user_id: str) -> list[CartItem]:
        with self._lock:
            return [i.model_copy() for i in self._cart.values() if i.user_id == user_id]

    def remove_cart_item(self, user_id: str, item_id: str) -> bool:
        with self._lock:
            item = self._cart.get(item_id)
            if item is None or item.user_id != user_id:
                return False
            del self._cart[item_id]
            return True
