from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import security
from app.core.config import settings
from app.db.database import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/login", response_model=schemas.Token)
def login_access_token(
    login_data: schemas.LoginRequest,
    db: Session = Depends(get_db)
) -> Any:
    """Exchange username/password for a bearer token"""
    user = crud.user.authenticate(db, username=login_data.username, password=login_data.password)
    if not user:
        logger.info(f"Failed login for username: {login_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = security.create_access_token(user.username, expires_delta=access_token_expires)

    logger.info(f"User {user.username} logged in")
    return {"access_token": access_token, "token_type": "bearer"}
