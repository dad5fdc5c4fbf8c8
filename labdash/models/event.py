"""Personal calendar events."""

from sqlalchemy import Column, Date, DateTime, Index, String, Text
from sqlalchemy.sql import func
from ..database import Base
from ._ids import new_id, utcnow


class Event(Base):
    """A calendar entry covering every day from start_date to end_date inclusive."""

    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_user_id_start", "user_id", "start_date"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)
