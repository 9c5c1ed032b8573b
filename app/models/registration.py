from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from app.models.base import BaseModel
import enum

class RegistrationStatus(enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"  # Terminal

class Registration(BaseModel):
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_registration_user_event"),
    )

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(RegistrationStatus), nullable=False, default=RegistrationStatus.PENDING)
