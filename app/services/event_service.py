import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app import crud
from app.core.clock import as_utc
from app.core.exceptions import BadRequestError, ResourceNotFoundError
from app.core.permissions import is_admin, is_owner_or_admin, require_admin, require_owner, require_owner_or_admin
from app.db.database import transactional
from app.models.event import Event, EventStatus
from app.models.user import User
from app.schemas.event import EventCreate, EventFilter, EventUpdate
from app.services.storage_service import storage_service
from app.services.webpush_service import webpush_service

logger = logging.getLogger(__name__)

SUBMITTABLE_STATUSES = (EventStatus.DRAFT, EventStatus.REJECTED)


def validate_dates(start_date: datetime, end_date: datetime, date_deadline: datetime) -> None:
    """Registration deadline <= start <= end"""
    start_date, end_date, date_deadline = as_utc(start_date), as_utc(end_date), as_utc(date_deadline)
    if start_date > end_date:
        raise BadRequestError("Event start date must be before its end date")
    if date_deadline > start_date:
        raise BadRequestError("Registration deadline must be on or before the event start date")


def can_read(event: Event, user: User) -> bool:
    return event.status == EventStatus.APPROVED or is_owner_or_admin(event.owner_id, user)


def get_existing(db: Session, event_id: int) -> Event:
    event = crud.event.get(db, id=event_id)
    if not event:
        raise ResourceNotFoundError(f"Event with id {event_id} not found")
    return event


def get_readable(db: Session, *, event_id: int, user: User) -> Event:
    """Unapproved events are hidden from everyone but their owner and admins."""
    event = get_existing(db, event_id)
    if not can_read(event, user):
        raise ResourceNotFoundError(f"Event with id {event_id} not found")
    return event


def create_event(db: Session, *, event_in: EventCreate, user: User) -> Event:
    validate_dates(event_in.start_date, event_in.end_date, event_in.date_deadline)
    with transactional(db):
        event = crud.event.create_with_owner(db, obj_in=event_in, owner_id=user.id)
    logger.info(f"Event {event.id} created by {user.username}")
    return event


def list_events(
    db: Session, *, filters: EventFilter, user: User, skip: int = 0, limit: int = 100
) -> List[Event]:
    visible_to: Optional[int] = None if is_admin(user) else user.id
    return crud.event.get_filtered(db, filters=filters, visible_to=visible_to, skip=skip, limit=limit)


def update_event(db: Session, *, event_id: int, event_in: EventUpdate, user: User) -> Event:
    event = get_existing(db, event_id)
    require_owner(event.owner_id, user, "Only the event owner can update this event.")

    update_data = event_in.model_dump(exclude_unset=True)
    for field in ("name", "start_date", "end_date", "date_deadline"):
        # These columns are NOT NULL
        if field in update_data and update_data[field] is None:
            del update_data[field]

    validate_dates(
        update_data.get("start_date", event.start_date),
        update_data.get("end_date", event.end_date),
        update_data.get("date_deadline", event.date_deadline),
    )

    with transactional(db):
        event = crud.event.update(db, db_obj=event, obj_in=update_data)
    logger.info(f"Event {event.id} updated by {user.username}")
    return event


def delete_event(db: Session, *, event_id: int, user: User) -> None:
    event = get_existing(db, event_id)
    require_owner_or_admin(event.owner_id, user, "Only the event owner or an admin can delete this event.")

    with transactional(db):
        crud.event.remove_cascade(db, db_obj=event)

    storage_service.remove_event_files(event_id)
    logger.info(f"Event {event_id} deleted by {user.username}")


def submit_event(db: Session, *, event_id: int, user: User) -> Event:
    event = get_existing(db, event_id)
    require_owner(event.owner_id, user, "Only the event owner can submit this event.")

    if event.status not in SUBMITTABLE_STATUSES:
        logger.info(f"Event {event_id} is {event.status.value}; submit ignored")
        return event

    with transactional(db):
        event = crud.event.update(db, db_obj=event, obj_in={"status": EventStatus.PENDING})
    logger.info(f"Event {event_id} submitted for approval")
    return event


def approve_event(db: Session, *, event_id: int, admin: User) -> Event:
    return _review_event(db, event_id=event_id, admin=admin, new_status=EventStatus.APPROVED)


def reject_event(db: Session, *, event_id: int, admin: User) -> Event:
    return _review_event(db, event_id=event_id, admin=admin, new_status=EventStatus.REJECTED)


def _review_event(db: Session, *, event_id: int, admin: User, new_status: EventStatus) -> Event:
    require_admin(admin)
    event = get_existing(db, event_id)

    if event.status != EventStatus.PENDING:
        logger.info(f"Event {event_id} is {event.status.value}; {new_status.value} ignored")
        return event

    with transactional(db):
        event = crud.event.update(db, db_obj=event, obj_in={"status": new_status})
    logger.info(f"Event {event_id} {new_status.value} by {admin.username}")

    owner = crud.user.get(db, id=event.owner_id)
    if owner:
        verdict = "approved" if new_status == EventStatus.APPROVED else "rejected"
        webpush_service.send_notification_to_user(
            db,
            user=owner,
            title=f"Event {verdict}",
            body=f"Your event '{event.name}' has been {verdict}.",
            url=f"/events/{event.id}",
        )
    return event
