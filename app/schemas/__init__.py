# File: app/schemas/__init__.py
from .auth import Token, TokenData, LoginRequest
from .user import User, UserBase, UserCreate
from .event import Event, EventBase, EventCreate, EventUpdate, EventFilter
from .registration import Registration, RegistrationFilter
from .post import Post, PostCreate, PostUpdate, Reaction, ReactionRequest
from .webpush import Subscription, SubscriptionKeys, PublicKey, SubscriptionExists
from .common import ErrorResponse, TempUpload

__all__ = [
    "Token", "TokenData", "LoginRequest",
    "User", "UserBase", "UserCreate",
    "Event", "EventBase", "EventCreate", "EventUpdate", "EventFilter",
    "Registration", "RegistrationFilter",
    "Post", "PostCreate", "PostUpdate", "Reaction", "ReactionRequest",
    "Subscription", "SubscriptionKeys", "PublicKey", "SubscriptionExists",
    "ErrorResponse", "TempUpload",
]
