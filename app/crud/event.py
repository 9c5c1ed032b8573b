# File: app/crud/event.py
from typing import List, Optional
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Query, Session
from app.crud.base import CRUDBase
from app.models.event import Event, EventStatus
from app.models.post import Post, PostMedia, PostReaction
from app.models.registration import Registration
from app.schemas.event import EventCreate, EventUpdate, EventFilter

class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def create_with_owner(self, db: Session, *, obj_in: EventCreate, owner_id: int) -> Event:
        event_data = obj_in.model_dump()
        event_data["owner_id"] = owner_id
        event_data["status"] = EventStatus.DRAFT

        db_obj = Event(**event_data)
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def build_list_query(
        self, db: Session, *, filters: EventFilter, visible_to: Optional[int] = None
    ) -> Query:
        """
        Single query for the listing endpoint.

        ``visible_to`` restricts the rows to APPROVED events plus the events
        owned by that user id; ``None`` means no visibility restriction.
        """
        query = db.query(Event)

        if filters.status is not None:
            query = query.filter(Event.status == filters.status)
        if filters.owner_id is not None:
            query = query.filter(Event.owner_id == filters.owner_id)
        if filters.search:
            query = query.filter(
                func.lower(Event.name).contains(filters.search.lower(), autoescape=True)
            )

        if visible_to is not None:
            query = query.filter(
                or_(Event.status == EventStatus.APPROVED, Event.owner_id == visible_to)
            )

        return query.order_by(Event.created_at.desc(), Event.id.desc())

    def get_filtered(
        self,
        db: Session,
        *,
        filters: EventFilter,
        visible_to: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Event]:
        query = self.build_list_query(db, filters=filters, visible_to=visible_to)
        return query.offset(skip).limit(limit).all()

    def remove_cascade(self, db: Session, *, db_obj: Event) -> Event:
        """Delete the event together with its wall and its registrations."""
        post_ids = select(Post.id).where(Post.event_id == db_obj.id)

        db.query(PostReaction).filter(PostReaction.post_id.in_(post_ids)).delete(synchronize_session=False)
        db.query(PostMedia).filter(PostMedia.post_id.in_(post_ids)).delete(synchronize_session=False)
        db.query(Post).filter(Post.event_id == db_obj.id).delete(synchronize_session=False)
        db.query(Registration).filter(Registration.event_id == db_obj.id).delete(synchronize_session=False)

        db.delete(db_obj)
        db.flush()
        return db_obj

event = CRUDEvent(Event)
