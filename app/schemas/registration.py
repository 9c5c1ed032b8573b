from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from app.models.registration import RegistrationStatus

class RegistrationCreate(BaseModel):
    user_id: int
    event_id: int

class RegistrationUpdate(BaseModel):
    status: RegistrationStatus

class RegistrationFilter(BaseModel):
    status: Optional[RegistrationStatus] = None
    event_id: Optional[int] = None
    user_id: Optional[int] = None

class Registration(BaseModel):
    id: int
    user_id: int
    username: str
    event_id: int
    event_name: str
    status: RegistrationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
