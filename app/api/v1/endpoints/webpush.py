from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app import schemas
from app.core.deps import get_current_user
from app.db.database import get_db
from app.models.user import User
from app.services.webpush_service import webpush_service

router = APIRouter()

@router.post("/subscribe", status_code=status.HTTP_201_CREATED)
def subscribe(
    subscription: schemas.Subscription,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """Register this browser endpoint for the caller"""
    webpush_service.subscribe(db, subscription=subscription, user=current_user)
    return {"message": "Subscribed"}

@router.post("/verify-subscription", response_model=schemas.SubscriptionExists)
def verify_subscription(
    subscription: schemas.Subscription,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    return {"exists": webpush_service.verify_subscription(db, subscription=subscription)}

@router.get("/public-key", response_model=schemas.PublicKey)
def read_public_key() -> Any:
    """VAPID application server key for PushManager.subscribe()"""
    return {"publicKey": webpush_service.public_key()}

@router.get("/test")
def send_test_notification(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    webpush_service.send_test_notification(db, user=current_user)
    return {"message": "Test notification sent"}
