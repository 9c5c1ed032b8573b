from typing import Any, List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import schemas
from app.core.deps import get_current_user
from app.db.database import get_db
from app.models.user import User
from app.services import post_service

router = APIRouter()

@router.get("/events/{event_id}/posts", response_model=List[schemas.Post])
def read_event_posts(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500)
) -> Any:
    """Event wall, newest first"""
    return post_service.list_posts(db, event_id=event_id, user=current_user, skip=skip, limit=limit)

@router.post("/events/{event_id}/posts", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
def create_post(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    post_in: schemas.PostCreate,
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Publish a post on the event wall.

    ``media`` holds the tempId values returned by ``POST /uploads``.
    """
    return post_service.create_post(db, event_id=event_id, post_in=post_in, user=current_user)

@router.get("/posts/{post_id}", response_model=schemas.Post)
def read_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return post_service.get_post(db, post_id=post_id, user=current_user)

@router.patch("/posts/{post_id}", response_model=schemas.Post)
def update_post(
    *,
    db: Session = Depends(get_db),
    post_id: int,
    post_in: schemas.PostUpdate,
    current_user: User = Depends(get_current_user)
) -> Any:
    return post_service.update_post(db, post_id=post_id, post_in=post_in, user=current_user)

@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> None:
    post_service.delete_post(db, post_id=post_id, user=current_user)

@router.get("/posts/{post_id}/reaction", response_model=schemas.Reaction)
def read_reaction(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Caller's reaction, NONE when there is none"""
    return post_service.get_reaction(db, post_id=post_id, user=current_user)

@router.put("/posts/{post_id}/reaction", response_model=schemas.Reaction)
def set_reaction(
    *,
    db: Session = Depends(get_db),
    post_id: int,
    reaction_in: schemas.ReactionRequest,
    current_user: User = Depends(get_current_user)
) -> Any:
    return post_service.react(db, post_id=post_id, reaction_type=reaction_in.type, user=current_user)

@router.delete("/posts/{post_id}/reaction", status_code=status.HTTP_204_NO_CONTENT)
def delete_reaction(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> None:
    post_service.delete_reaction(db, post_id=post_id, user=current_user)
