from pydantic import BaseModel, Field

class SubscriptionKeys(BaseModel):
    p256dh: str = Field(..., min_length=1)
    auth: str = Field(..., min_length=1)

class Subscription(BaseModel):
    """Browser PushSubscription.toJSON() payload."""
    endpoint: str = Field(..., min_length=1)
    keys: SubscriptionKeys

class PublicKey(BaseModel):
    publicKey: str

class SubscriptionExists(BaseModel):
    exists: bool
