import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from eventhub.core.errors import ConflictError, InsufficientTicketsError, NotFoundError
from eventhub.models import (
    ActivityModel,
    Base,
    BookingModel,
    CartItemModel,
    EventModel,
    UserModel,
    UserSessionModel,
)
from eventhub.schemas.booking import Booking
from eventhub.schemas.cart import CartItem
from eventhub.schemas.event import Event
from eventhub.schemas.user import Activity, SessionRecord, User
from eventhub.store.base import Store

logger = logging.getLogger(__name__)


class SqlStore(Store):
    """Relational backend (Postgres in production, SQLite in tests).

    Each operation runs in its own session; the ticket decrement is a single
    conditional UPDATE so concurrent bookings cannot oversell.
    """

    def __init__(self, engine: Engine, create_tables: bool = False) -> None:
        self._engine = engine
        self._create_tables = create_tables
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def open(self) -> None:
        if self._create_tables:
            Base.metadata.create_all(bind=self._engine)
            logger.info("[db] tables ensured on %s", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self._engine.dispose()

    # users

    def add_user(self, user: User) -> User:
        with self._session_factory() as db:
            if db.scalar(select(UserModel.id).where(UserModel.email == user.email)):
                raise ConflictError("User already exists with this email")
            db.add(UserModel(**user.model_dump()))
            try:
                db.commit()
            except IntegrityError:
                # lost a race against a concurrent sign-up with the same email
                db.rollback()
                raise ConflictError("User already exists with this email")
        return user.model_copy()

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session_factory() as db:
            row = db.get(UserModel, user_id)
            return User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session_factory() as db:
            row = db.scalar(select(UserModel).where(UserModel.email == email))
            return User.model_validate(row) if row else None

    def record_login(self, user_id: str, at: datetime) -> User:
        with self._session_factory() as db:
            result = db.execute(
                update(UserModel)
                .where(UserModel.id == user_id)
                .values(login_count=UserModel.login_count + 1, last_login=at)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundError("User not found")
            db.commit()
            return User.model_validate(db.get(UserModel, user_id))

    def list_users(self) -> list[User]:
        with self._session_factory() as db:
            rows = db.scalars(select(UserModel).order_by(UserModel.created_at, UserModel.id)).all()
            return [User.model_validate(r) for r in rows]

    # events

    def add_event(self, event: Event) -> Event:
        with self._session_factory() as db:
            db.add(EventModel(**event.model_dump()))
            db.commit()
        return event.model_copy()

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._session_factory() as db:
            row = db.get(EventModel, event_id)
            return Event.model_validate(row) if row else None

    def list_events(self) -> list[Event]:
        with self._session_factory() as db:
            rows = db.scalars(select(EventModel).order_by(EventModel.created_at, EventModel.id)).all()
            return [Event.model_validate(r) for r in rows]

    # bookings

    def commit_booking(self, booking: Booking) -> Event:
        with self._session_factory() as db:
            # Atomic compare-and-decrement: UPDATE ... WHERE available >= qty RETURNING
            row = db.execute(
                update(EventModel)
                .where(EventModel.id == booking.event_id, EventModel.available_tickets >= booking.quantity)
                .values(
                    available_tickets=EventModel.available_tickets - booking.quantity,
                    updated_at=booking.booking_date,
                )
                .returning(EventModel.available_tickets)
                .execution_options(synchronize_session=False)
            ).fetchone()
            if row is None:
                db.rollback()
                current = db.get(EventModel, booking.event_id)
                if current is None:
                    raise NotFoundError("Event not found")
                raise InsufficientTicketsError(current.available_tickets)
            db.add(BookingModel(**booking.model_dump()))
            db.commit()
            return Event.model_validate(db.get(EventModel, booking.event_id))

    def list_bookings(self, user_id: Optional[str] = None) -> list[Booking]:
        with self._session_factory() as db:
            q = select(BookingModel).order_by(BookingModel.booking_date, BookingModel.id)
            if user_id is not None:
                q = q.where(BookingModel.user_id == user_id)
            return [Booking.model_validate(r) for r in db.scalars(q).all()]

    # sessions

    def add_session(self, session: SessionRecord) -> SessionRecord:
        with self._session_factory() as db:
            db.add(UserSessionModel(**session.model_dump()))
            db.commit()
        return session.model_copy()

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        with self._session_factory() as db:
            row = db.get(UserSessionModel, session_id)
            return SessionRecord.model_validate(row) if row else None

    def touch_session(self, session_id: str, at: datetime) -> Optional[SessionRecord]:
        with self._session_factory() as db:
            row = db.get(UserSessionModel, session_id)
            if row is None:
                return None
            if row.is_active:
                row.last_activity = at
                db.commit()
            return SessionRecord.model_validate(row)

    def deactivate_session(self, session_id: str) -> bool:
        with self._session_factory() as db:
            result = db.execute(
                update(UserSessionModel)
                .where(UserSessionModel.session_id == session_id, UserSessionModel.is_active.is_(True))
                .values(is_active=False)
                .execution_options(synchronize_session=False)
            )
            db.commit()
            return result.rowcount > 0

    def list_sessions(self) -> list[SessionRecord]:
        with self._session_factory() as db:
            rows = db.scalars(select(UserSessionModel).order_by(UserSessionModel.created_at)).all()
            return [SessionRecord.model_validate(r) for r in rows]

    # activity

    def record_activity(self, activity: Activity) -> None:
        with self._session_factory() as db:
            db.add(ActivityModel(**activity.model_dump()))
            db.commit()

    def list_activity(self, user_id: Optional[str] = None) -> list[Activity]:
        with self._session_factory() as db:
            q = select(ActivityModel).order_by(ActivityModel.id)
            if user_id is not None:
                q = q.where(ActivityModel.user_id == user_id)
            return [Activity.model_validate(r) for r in db.scalars(q).all()]

    # cart

    def upsert_cart_item(self, item: CartItem) -> CartItem:
        same_line = (CartItemModel.user_id == item.user_id, CartItemModel.event_id == item.event_id)
        replace_line = (
            update(CartItemModel)
            .where(*same_line)
            .values(quantity=item.quantity, price_per_ticket=item.price_per_ticket, added_at=item.added_at)
            .execution_options(synchronize_session=False)
        )
        with self._session_factory() as db:
            if db.execute(replace_line).rowcount == 0:
                db.add(CartItemModel(**item.model_dump()))
                try:
                    db.commit()
                except IntegrityError:
                    # a concurrent add created the line first (uq_cart_items_user_event)
                    db.rollback()
                    db.execute(replace_line)
                    db.commit()
            else:
                db.commit()
            return CartItem.model_validate(db.scalars(select(CartItemModel).where(*same_line)).one())

    def list_cart_items(self, user_id: str) -> list[CartItem]:
        with self._session_factory() as db:
            rows = db.scalars(
                select(CartItemModel).where(CartItemModel.user_id == user_id).order_by(CartItemModel.added_at)
            ).all()
            return [CartItem.model_validate(r) for r in rows]

    def remove_cart_item(self, user_id: str, item_id: str) -> bool:
        with self._session_factory() as db:
            result = db.execute(
                delete(CartItemModel).where(CartItemModel.id == item_id, CartItemModel.user_id == user_id)
            )
            db.commit()
            return result.rowcount > 0
