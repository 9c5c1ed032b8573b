# File: app/models/event.py
from sqlalchemy import Column, String, Text, ForeignKey, Integer, DateTime, Enum
from app.models.base import BaseModel
import enum

class EventStatus(enum.Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

class Event(BaseModel):
    __tablename__ = "events"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    status = Column(Enum(EventStatus), nullable=False, default=EventStatus.DRAFT, index=True)

    # Schedule
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    date_deadline = Column(DateTime(timezone=True), nullable=False)

    # Metadata
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
