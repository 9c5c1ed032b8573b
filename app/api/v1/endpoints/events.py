from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import schemas
from app.core.deps import get_current_user
from app.db.database import get_db
from app.models.event import EventStatus
from app.models.user import User
from app.services import event_service

router = APIRouter()

@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    event_in: schemas.EventCreate,
    current_user: User = Depends(get_current_user)
) -> Any:
    """Create a DRAFT event owned by the caller"""
    return event_service.create_event(db, event_in=event_in, user=current_user)

@router.get("", response_model=List[schemas.Event])
def read_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    event_status: Optional[EventStatus] = Query(None, alias="status"),
    owner_id: Optional[int] = None,
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500)
) -> Any:
    filters = schemas.EventFilter(status=event_status, owner_id=owner_id, search=search)
    return event_service.list_events(db, filters=filters, user=current_user, skip=skip, limit=limit)

@router.get("/{event_id}", response_model=schemas.Event)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return event_service.get_readable(db, event_id=event_id, user=current_user)

@router.patch("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    event_in: schemas.EventUpdate,
    current_user: User = Depends(get_current_user)
) -> Any:
    return event_service.update_event(db, event_id=event_id, event_in=event_in, user=current_user)

@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> None:
    """Delete an event with its posts, media and registrations"""
    event_service.delete_event(db, event_id=event_id, user=current_user)

@router.post("/{event_id}/submit", response_model=schemas.Event)
def submit_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Send a DRAFT or REJECTED event for admin review"""
    return event_service.submit_event(db, event_id=event_id, user=current_user)
