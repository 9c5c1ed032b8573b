from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import schemas
from app.core.deps import get_current_admin
from app.db.database import get_db
from app.models.user import User
from app.services import event_service

router = APIRouter()

@router.post("/{event_id}/approve", response_model=schemas.Event)
def approve_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
) -> Any:
    return event_service.approve_event(db, event_id=event_id, admin=current_admin)

@router.post("/{event_id}/reject", response_model=schemas.Event)
def reject_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin)
) -> Any:
    return event_service.reject_event(db, event_id=event_id, admin=current_admin)
