# File: app/schemas/user.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from app.models.user import UserRole

class UserBase(BaseModel):
    firstname: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=100)

class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('firstname', 'lastname', 'username', mode='before')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('username')
    @classmethod
    def username_has_no_spaces(cls, v):
        if any(ch.isspace() for ch in v):
            raise ValueError('Username must not contain whitespace')
        return v

class User(UserBase):
    id: int
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
