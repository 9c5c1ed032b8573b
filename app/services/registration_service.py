"""
Volunteer registrations.

PENDING -> APPROVED | REJECTED (by the event owner or an admin), and
APPROVED -> COMPLETED. COMPLETED is terminal: no further status change,
and the volunteer can no longer cancel.
"""

import logging
from typing import Any, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app import crud
from app.core.clock import as_utc, utcnow
from app.core.exceptions import InvalidOperationError, ResourceNotFoundError, UnauthorizedAccessError
from app.core.permissions import is_admin, is_owner_or_admin
from app.db.database import transactional
from app.models.event import EventStatus
from app.models.registration import Registration, RegistrationStatus
from app.models.user import User
from app.schemas.registration import RegistrationFilter, RegistrationUpdate
from app.services.webpush_service import webpush_service

logger = logging.getLogger(__name__)


def _get_details(db: Session, registration_id: int) -> Any:
    row = crud.registration.get_with_details(db, id=registration_id)
    if not row:
        raise ResourceNotFoundError(f"Registration with id {registration_id} not found")
    return row


def _ensure_not_completed(registration: Registration) -> None:
    if registration.status == RegistrationStatus.COMPLETED:
        raise InvalidOperationError("Registration is already completed")


def join_event(db: Session, *, event_id: int, user: User) -> Registration:
    event = crud.event.get(db, id=event_id)
    if not event or event.status != EventStatus.APPROVED:
        raise ResourceNotFoundError(f"Event with id {event_id} not found")

    if utcnow() > as_utc(event.date_deadline):
        raise InvalidOperationError("Registration deadline has passed")

    existing = crud.registration.get_by_user_and_event(db, user_id=user.id, event_id=event_id)
    if existing:
        return existing

    try:
        with transactional(db):
            registration = crud.registration.create_pending(db, user_id=user.id, event_id=event_id)
    except IntegrityError:
        # Another request registered the same user first
        logger.info(f"Concurrent join for user {user.id} on event {event_id}; returning existing row")
        registration = crud.registration.get_by_user_and_event(db, user_id=user.id, event_id=event_id)
        if registration is None:
            raise
        return registration

    logger.info(f"User {user.username} joined event {event_id}")
    return registration


def cancel_join(db: Session, *, event_id: int, user: User) -> None:
    registration = crud.registration.get_by_user_and_event(db, user_id=user.id, event_id=event_id)
    if not registration:
        raise ResourceNotFoundError(f"No registration for event {event_id}")
    _ensure_not_completed(registration)

    with transactional(db):
        crud.registration.remove(db, db_obj=registration)
    logger.info(f"User {user.username} left event {event_id}")


def get_registration(db: Session, *, registration_id: int, user: User) -> Any:
    row = _get_details(db, registration_id)
    registration, _, _, event_owner_id = row
    if registration.user_id != user.id and not is_owner_or_admin(event_owner_id, user):
        raise UnauthorizedAccessError("You do not have access to this registration.")
    return row


def list_registrations(
    db: Session, *, filters: RegistrationFilter, user: User, skip: int = 0, limit: int = 100
) -> List[Any]:
    visible_to = None if is_admin(user) else user.id
    return crud.registration.get_filtered(db, filters=filters, visible_to=visible_to, skip=skip, limit=limit)


def delete_registration(db: Session, *, registration_id: int, user: User) -> None:
    registration = crud.registration.get(db, id=registration_id)
    if not registration:
        raise ResourceNotFoundError(f"Registration with id {registration_id} not found")
    if registration.user_id != user.id and not is_admin(user):
        raise UnauthorizedAccessError("Only the volunteer or an admin can delete this registration.")
    if not is_admin(user):
        _ensure_not_completed(registration)

    with transactional(db):
        crud.registration.remove(db, db_obj=registration)
    logger.info(f"Registration {registration_id} deleted by {user.username}")


def approve_registration(db: Session, *, registration_id: int, user: User) -> Any:
    return _change_status(db, registration_id=registration_id, user=user, new_status=RegistrationStatus.APPROVED)


def reject_registration(db: Session, *, registration_id: int, user: User) -> Any:
    return _change_status(db, registration_id=registration_id, user=user, new_status=RegistrationStatus.REJECTED)


def complete_registration(db: Session, *, registration_id: int, user: User) -> Any:
    return _change_status(db, registration_id=registration_id, user=user, new_status=RegistrationStatus.COMPLETED)


def _change_status(db: Session, *, registration_id: int, user: User, new_status: RegistrationStatus) -> Any:
    registration, _, event_name, event_owner_id = _get_details(db, registration_id)
    if not is_owner_or_admin(event_owner_id, user):
        raise UnauthorizedAccessError("Only the event owner or an admin can manage registrations.")

    _ensure_not_completed(registration)
    if new_status == RegistrationStatus.COMPLETED and registration.status != RegistrationStatus.APPROVED:
        raise InvalidOperationError("Only approved registrations can be completed")

    with transactional(db):
        crud.registration.update(db, db_obj=registration, obj_in=RegistrationUpdate(status=new_status))
    logger.info(f"Registration {registration_id} -> {new_status.value} by {user.username}")

    volunteer = crud.user.get(db, id=registration.user_id)
    if volunteer:
        messages = {
            RegistrationStatus.APPROVED: ("Registration approved", f"You have been accepted for '{event_name}'."),
            RegistrationStatus.REJECTED: ("Registration rejected", f"Your registration for '{event_name}' was declined."),
            RegistrationStatus.COMPLETED: ("Participation completed", f"Thank you for volunteering at '{event_name}'!"),
        }
        title, body = messages[new_status]
        webpush_service.send_notification_to_user(
            db, user=volunteer, title=title, body=body, url=f"/events/{registration.event_id}"
        )

    return _get_details(db, registration_id)
