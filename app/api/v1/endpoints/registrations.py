from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_user
from app.db.database import get_db
from app.models.registration import RegistrationStatus
from app.models.user import User
from app.services import registration_service

router = APIRouter()

def to_schema(row: Any) -> schemas.Registration:
    registration, username, event_name, _ = row
    return schemas.Registration(
        id=registration.id,
        user_id=registration.user_id,
        username=username,
        event_id=registration.event_id,
        event_name=event_name,
        status=registration.status,
        created_at=registration.created_at,
        updated_at=registration.updated_at,
    )

@router.get("", response_model=List[schemas.Registration])
def read_registrations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    registration_status: Optional[RegistrationStatus] = Query(None, alias="status"),
    event_id: Optional[int] = None,
    user_id: Optional[int] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500)
) -> Any:
    """Registrations where the caller is the volunteer or the event owner (admins see all)"""
    filters = schemas.RegistrationFilter(status=registration_status, event_id=event_id, user_id=user_id)
    rows = registration_service.list_registrations(db, filters=filters, user=current_user, skip=skip, limit=limit)
    return [to_schema(row) for row in rows]

@router.get("/{registration_id}", response_model=schemas.Registration)
def read_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return to_schema(registration_service.get_registration(db, registration_id=registration_id, user=current_user))

@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> None:
    registration_service.delete_registration(db, registration_id=registration_id, user=current_user)

@router.post("/{event_id}/join", response_model=schemas.Registration)
def join_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Register the caller as a volunteer; joining twice returns the same registration"""
    registration = registration_service.join_event(db, event_id=event_id, user=current_user)
    return to_schema(crud.registration.get_with_details(db, id=registration.id))

@router.post("/{event_id}/cancel-join", status_code=status.HTTP_204_NO_CONTENT)
def cancel_join(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> None:
    registration_service.cancel_join(db, event_id=event_id, user=current_user)

@router.post("/{registration_id}/approve", response_model=schemas.Registration)
def approve_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return to_schema(registration_service.approve_registration(db, registration_id=registration_id, user=current_user))

@router.post("/{registration_id}/reject", response_model=schemas.Registration)
def reject_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return to_schema(registration_service.reject_registration(db, registration_id=registration_id, user=current_user))

@router.post("/{registration_id}/complete", response_model=schemas.Registration)
def complete_registration(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Mark an APPROVED volunteer's participation as done"""
    return to_schema(registration_service.complete_registration(db, registration_id=registration_id, user=current_user))
