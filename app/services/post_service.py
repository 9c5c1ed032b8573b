import logging
from pathlib import Path
from typing import Any, List
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.exceptions import ResourceNotFoundError, UnauthorizedAccessError
from app.core.permissions import is_admin, require_owner_or_admin
from app.db.database import transactional
from app.models.event import Event
from app.models.post import Post, ReactionType
from app.models.user import User
from app.schemas.post import PostCreate, PostUpdate
from app.services import event_service
from app.services.storage_service import storage_service

logger = logging.getLogger(__name__)


def to_schemas(db: Session, rows: List[Any]) -> List[schemas.Post]:
    """Build post projections from (Post, firstname, lastname) rows."""
    post_ids = [row[0].id for row in rows]
    media = crud.post.media_paths(db, post_ids=post_ids)
    reactions = crud.post.reaction_counts(db, post_ids=post_ids)

    return [
        schemas.Post(
            id=post.id,
            event_id=post.event_id,
            author_id=post.author_id,
            author_name=f"{firstname} {lastname}",
            content=post.content,
            media_urls=media.get(post.id, []),
            reaction_counts=reactions.get(post.id, {}),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
        for post, firstname, lastname in rows
    ]


def _projection(db: Session, post_id: int) -> schemas.Post:
    row = crud.post.get_with_author(db, id=post_id)
    if not row:
        raise ResourceNotFoundError(f"Post with id {post_id} not found")
    return to_schemas(db, [row])[0]


def _get_post_and_event(db: Session, post_id: int, user: User):
    post = crud.post.get(db, id=post_id)
    if not post:
        raise ResourceNotFoundError(f"Post with id {post_id} not found")
    event = event_service.get_readable(db, event_id=post.event_id, user=user)
    return post, event


def _attach_media(db: Session, *, post: Post, temp_names: List[str]) -> None:
    # Files already moved stay on disk if the transaction later rolls back
    for temp_name in temp_names:
        path = storage_service.move_to_permanent(temp_name, post.event_id, post.id)
        crud.post_media.create_for_post(db, post_id=post.id, resource_id=Path(temp_name).stem, path=path)


def list_posts(db: Session, *, event_id: int, user: User, skip: int = 0, limit: int = 100) -> List[schemas.Post]:
    event_service.get_readable(db, event_id=event_id, user=user)
    rows = crud.post.get_by_event(db, event_id=event_id, skip=skip, limit=limit)
    return to_schemas(db, rows)


def create_post(db: Session, *, event_id: int, post_in: PostCreate, user: User) -> schemas.Post:
    event: Event = event_service.get_readable(db, event_id=event_id, user=user)

    with transactional(db):
        post = crud.post.create_for_event(db, content=post_in.content, event_id=event.id, author_id=user.id)
        _attach_media(db, post=post, temp_names=post_in.media)

    logger.info(f"Post {post.id} created on event {event_id} by {user.username} ({len(post_in.media)} media)")
    return _projection(db, post.id)


def get_post(db: Session, *, post_id: int, user: User) -> schemas.Post:
    _get_post_and_event(db, post_id, user)
    return _projection(db, post_id)


def update_post(db: Session, *, post_id: int, post_in: PostUpdate, user: User) -> schemas.Post:
    post, _ = _get_post_and_event(db, post_id, user)
    require_owner_or_admin(post.author_id, user, "Only the author or an admin can edit this post.")

    with transactional(db):
        post = crud.post.update(db, db_obj=post, obj_in={"content": post_in.content})
        _attach_media(db, post=post, temp_names=post_in.media)

    logger.info(f"Post {post_id} updated by {user.username}")
    return _projection(db, post_id)


def delete_post(db: Session, *, post_id: int, user: User) -> None:
    post, event = _get_post_and_event(db, post_id, user)
    if user.id not in (post.author_id, event.owner_id) and not is_admin(user):
        raise UnauthorizedAccessError("Only the author, the event owner or an admin can delete this post.")

    event_id = post.event_id
    with transactional(db):
        crud.post.remove_cascade(db, db_obj=post)

    storage_service.remove_post_files(event_id, post_id)
    logger.info(f"Post {post_id} deleted by {user.username}")


def react(db: Session, *, post_id: int, reaction_type: ReactionType, user: User) -> schemas.Reaction:
    _get_post_and_event(db, post_id, user)

    with transactional(db):
        if reaction_type == ReactionType.NONE:
            existing = crud.reaction.get_by_post_and_user(db, post_id=post_id, user_id=user.id)
            if existing:
                crud.reaction.remove(db, db_obj=existing)
        else:
            crud.reaction.upsert(db, post_id=post_id, user_id=user.id, reaction_type=reaction_type)

    return schemas.Reaction(post_id=post_id, type=reaction_type)


def get_reaction(db: Session, *, post_id: int, user: User) -> schemas.Reaction:
    _get_post_and_event(db, post_id, user)
    existing = crud.reaction.get_by_post_and_user(db, post_id=post_id, user_id=user.id)
    return schemas.Reaction(post_id=post_id, type=existing.reaction_type if existing else ReactionType.NONE)


def delete_reaction(db: Session, *, post_id: int, user: User) -> None:
    react(db, post_id=post_id, reaction_type=ReactionType.NONE, user=user)
