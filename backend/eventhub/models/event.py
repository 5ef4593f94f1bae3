from sqlalchemy import String, Integer, DateTime, Numeric, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

from eventhub.models.base import Base

class EventModel(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("available_tickets >= 0", name="ck_events_available_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    location: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(64), default="General")
    total_tickets: Mapped[int] = mapped_column(Integer)
    available_tickets: Mapped[int] = mapped_column(Integer)
    price: Mapped[float] = mapped_column(Numeric(14, 2))
    image_url: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(32), default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
