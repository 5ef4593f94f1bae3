from sqlalchemy import String, Integer, ForeignKey, DateTime, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

from eventhub.models.base import Base

class CartItemModel(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_cart_items_user_event"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    event_id: Mapped[str] = mapped_column(String(64), ForeignKey("events.id"))
    quantity: Mapped[int] = mapped_column(Integer)
    price_per_ticket: Mapped[float] = mapped_column(Numeric(14, 2))
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
