# File: app/models/user.py
from sqlalchemy import Column, String, Enum
from app.models.base import BaseModel
import enum

class UserRole(enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

class User(BaseModel):
    __tablename__ = "users"

    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER)

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"
