from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core.deps import get_current_user
from app.db.database import get_db, transactional
from app.models.user import User

router = APIRouter()

@router.get("/me", response_model=schemas.User)
def read_user_me(
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user."""
    return current_user

@router.post("", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(get_db),
    user_in: schemas.UserCreate,
) -> Any:
    """Public sign-up. New accounts always get the USER role."""
    username_taken = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="A user with this username already exists"
    )

    if crud.user.get_by_username(db, username=user_in.username):
        raise username_taken

    try:
        with transactional(db):
            user = crud.user.create(db, obj_in=user_in)
    except IntegrityError:
        raise username_taken

    return user
