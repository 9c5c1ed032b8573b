from sqlalchemy import Column, String, Text, Integer, ForeignKey, Enum, UniqueConstraint
from app.models.base import BaseModel
import enum

class ReactionType(enum.Enum):
    NONE = "NONE"  # Request to remove the reaction, never stored
    LIKE = "LIKE"
    LOVE = "LOVE"
    HAHA = "HAHA"
    WOW = "WOW"
    SAD = "SAD"
    ANGRY = "ANGRY"

class Post(BaseModel):
    __tablename__ = "posts"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)

class PostMedia(BaseModel):
    __tablename__ = "post_media"

    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_id = Column(String(64), nullable=False)
    path = Column(String(500), nullable=False)

class PostReaction(BaseModel):
    __tablename__ = "post_reactions"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_reaction_post_user"),
    )

    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reaction_type = Column(Enum(ReactionType), nullable=False)
