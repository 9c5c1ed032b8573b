from collections import defaultdict
from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Query, Session
from app.crud.base import CRUDBase
from app.models.post import Post, PostMedia, PostReaction, ReactionType
from app.models.user import User
from app.schemas.post import PostCreate, PostMediaCreate, PostUpdate, ReactionCreate

class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):

    def create_for_event(self, db: Session, *, content: str, event_id: int, author_id: int) -> Post:
        db_obj = Post(content=content, event_id=event_id, author_id=author_id)
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def _with_author(self, db: Session) -> Query:
        # Rows are (Post, firstname, lastname)
        return (
            db.query(Post, User.firstname, User.lastname)
            .join(User, User.id == Post.author_id)
        )

    def get_with_author(self, db: Session, *, id: int) -> Optional[Any]:
        return self._with_author(db).filter(Post.id == id).first()

    def get_by_event(self, db: Session, *, event_id: int, skip: int = 0, limit: int = 100) -> List[Any]:
        return (
            self._with_author(db)
            .filter(Post.event_id == event_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def media_paths(self, db: Session, *, post_ids: List[int]) -> Dict[int, List[str]]:
        paths: Dict[int, List[str]] = defaultdict(list)
        if not post_ids:
            return paths
        rows = (
            db.query(PostMedia.post_id, PostMedia.path)
            .filter(PostMedia.post_id.in_(post_ids))
            .order_by(PostMedia.id)
            .all()
        )
        for post_id, path in rows:
            paths[post_id].append(path)
        return paths

    def reaction_counts(self, db: Session, *, post_ids: List[int]) -> Dict[int, Dict[str, int]]:
        counts: Dict[int, Dict[str, int]] = defaultdict(dict)
        if not post_ids:
            return counts
        rows = (
            db.query(PostReaction.post_id, PostReaction.reaction_type, func.count(PostReaction.id))
            .filter(PostReaction.post_id.in_(post_ids))
            .group_by(PostReaction.post_id, PostReaction.reaction_type)
            .all()
        )
        for post_id, reaction_type, total in rows:
            counts[post_id][reaction_type.value] = total
        return counts

    def remove_cascade(self, db: Session, *, db_obj: Post) -> Post:
        db.query(PostReaction).filter(PostReaction.post_id == db_obj.id).delete(synchronize_session=False)
        db.query(PostMedia).filter(PostMedia.post_id == db_obj.id).delete(synchronize_session=False)
        db.delete(db_obj)
        db.flush()
        return db_obj


class CRUDPostMedia(CRUDBase[PostMedia, PostMediaCreate, PostMediaCreate]):

    def create_for_post(self, db: Session, *, post_id: int, resource_id: str, path: str) -> PostMedia:
        return self.create(db, obj_in=PostMediaCreate(post_id=post_id, resource_id=resource_id, path=path))


class CRUDReaction(CRUDBase[PostReaction, ReactionCreate, ReactionCreate]):

    def get_by_post_and_user(self, db: Session, *, post_id: int, user_id: int) -> Optional[PostReaction]:
        return db.query(PostReaction).filter(
            PostReaction.post_id == post_id,
            PostReaction.user_id == user_id
        ).first()

    def upsert(self, db: Session, *, post_id: int, user_id: int, reaction_type: ReactionType) -> PostReaction:
        db_obj = self.get_by_post_and_user(db, post_id=post_id, user_id=user_id)
        if db_obj:
            return self.update(db, db_obj=db_obj, obj_in={"reaction_type": reaction_type})
        return self.create(
            db, obj_in=ReactionCreate(post_id=post_id, user_id=user_id, reaction_type=reaction_type)
        )

post = CRUDPost(Post)
post_media = CRUDPostMedia(PostMedia)
reaction = CRUDReaction(PostReaction)
