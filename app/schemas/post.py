from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
from datetime import datetime
from app.models.post import ReactionType

class PostBase(BaseModel):
    content: str

    @field_validator('content')
    @classmethod
    def content_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Content cannot be empty')
        return v

class PostCreate(PostBase):
    # tempId values returned by POST /uploads
    media: List[str] = Field(default_factory=list)

class PostUpdate(PostBase):
    media: List[str] = Field(default_factory=list)

class Post(BaseModel):
    id: int
    event_id: int
    author_id: int
    author_name: str
    content: str
    media_urls: List[str] = Field(default_factory=list)
    reaction_counts: Dict[str, int] = Field(default_factory=dict)
    created_at: datetime
    updated_at: Optional[datetime] = None

class ReactionRequest(BaseModel):
    type: ReactionType

class Reaction(BaseModel):
    post_id: int
    type: ReactionType

class PostMediaCreate(BaseModel):
    post_id: int
    resource_id: str = Field(..., max_length=64)
    path: str = Field(..., max_length=500)

class ReactionCreate(BaseModel):
    post_id: int
    user_id: int
    reaction_type: ReactionType
