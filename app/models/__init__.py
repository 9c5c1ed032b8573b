from .base import BaseModel
from .user import User, UserRole
from .event import Event, EventStatus
from .registration import Registration, RegistrationStatus
from .post import Post, PostMedia, PostReaction, ReactionType
from .push_subscription import PushSubscription

__all__ = [
    "BaseModel", "User", "UserRole", "Event", "EventStatus",
    "Registration", "RegistrationStatus", "Post", "PostMedia", "PostReaction",
    "ReactionType", "PushSubscription",
]
