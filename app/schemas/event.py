# File: app/schemas/event.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from app.core.clock import as_utc
from app.models.event import EventStatus

class EventBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    date_deadline: datetime

class EventCreate(EventBase):

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Event name cannot be empty')
        return v.strip()

    @field_validator('start_date', 'end_date', 'date_deadline')
    @classmethod
    def normalize_timezone(cls, v):
        return as_utc(v)

class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    date_deadline: Optional[datetime] = None

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Event name cannot be empty')
        return v.strip() if v else v

    @field_validator('start_date', 'end_date', 'date_deadline')
    @classmethod
    def normalize_timezone(cls, v):
        return as_utc(v)

class EventFilter(BaseModel):
    """Optional listing filters, combined with AND."""
    status: Optional[EventStatus] = None
    owner_id: Optional[int] = None
    search: Optional[str] = None

class Event(EventBase):
    id: int
    status: EventStatus
    owner_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
