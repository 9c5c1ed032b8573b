from .user import user
from .event import event
from .registration import registration
from .post import post, post_media, reaction
from .push_subscription import push_subscription

__all__ = ["user", "event", "registration", "post", "post_media", "reaction", "push_subscription"]
