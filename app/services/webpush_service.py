import base64
import json
import logging
import re
from typing import Any, Dict, Optional
from pywebpush import webpush, WebPushException
from sqlalchemy.orm import Session
from app import crud
from app.core.config import settings
from app.core.exceptions import InvalidOperationError
from app.db.database import transactional
from app.models.user import User
from app.schemas.webpush import Subscription

logger = logging.getLogger(__name__)

SUBJECT_PATTERN = re.compile(r"^mailto:[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PLACEHOLDER_KEYS = {"VAPID_PUBLIC_KEY", "VAPID_PRIVATE_KEY"}
GONE_STATUS_CODES = (404, 410)


def _b64url_decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


class WebPushService:
    """Best-effort browser push delivery; callers never see a delivery failure."""

    @property
    def enabled(self) -> bool:
        return settings.PUSH_NOTIFICATIONS_ENABLED

    def validate_configuration(self) -> None:
        """Raise ValueError when push is enabled with unusable VAPID settings."""
        if not self.enabled:
            logger.info("Push notifications are disabled. VAPID validation skipped.")
            return

        logger.info("Push notifications enabled. Validating VAPID credentials...")
        public_key = (settings.VAPID_PUBLIC_KEY or "").strip()
        private_key = (settings.VAPID_PRIVATE_KEY or "").strip()
        subject = (settings.VAPID_SUBJECT or "").strip()

        if not public_key or not private_key or not subject:
            raise ValueError("Missing VAPID properties (public key, private key, subject).")
        if public_key in PLACEHOLDER_KEYS or private_key in PLACEHOLDER_KEYS:
            raise ValueError("VAPID keys are still using default placeholder values.")
        if not SUBJECT_PATTERN.match(subject):
            raise ValueError("Invalid subject. Subject must be in format 'mailto:user@example.com'")

        try:
            public_bytes = _b64url_decode(public_key)
            private_bytes = _b64url_decode(private_key)
        except (ValueError, TypeError):
            raise ValueError("Failed to decode VAPID keys. Ensure they are URL-safe Base64.")

        # Uncompressed EC point / raw P-256 scalar
        if len(public_bytes) != 65 or public_bytes[0] != 0x04:
            raise ValueError("Public key must be a valid 65-byte uncompressed EC point.")
        if len(private_bytes) != 32:
            raise ValueError("Private key must be exactly 32 bytes.")

        logger.info("VAPID configuration validated successfully.")

    def public_key(self) -> str:
        if not self.enabled:
            raise InvalidOperationError("Push notifications are disabled in configuration.")
        return settings.VAPID_PUBLIC_KEY

    def subscribe(self, db: Session, *, subscription: Subscription, user: User) -> None:
        with transactional(db):
            existing = crud.push_subscription.get_by_endpoint(db, endpoint=subscription.endpoint)
            if existing:
                logger.info("Subscription already exists for this endpoint")
            else:
                crud.push_subscription.create_for_user(db, obj_in=subscription, user_id=user.id)
                logger.info(f"Saved new push subscription for user {user.username}")

        self._send_to_browser(
            db,
            endpoint=subscription.endpoint,
            p256dh=subscription.keys.p256dh,
            auth=subscription.keys.auth,
            payload=json.dumps({"title": "Subscribed!", "body": "Device registered successfully."}),
        )

    def verify_subscription(self, db: Session, *, subscription: Subscription) -> bool:
        return crud.push_subscription.get_by_endpoint(db, endpoint=subscription.endpoint) is not None

    def send_test_notification(self, db: Session, *, user: User) -> None:
        logger.info("Send Test Push Notification")
        self.send_payload_to_user(
            db,
            user=user,
            payload=json.dumps({"title": "Push Notification Test", "body": "Push notification works normally!"}),
        )

    def send_notification_to_user(
        self, db: Session, *, user: User, title: str, body: str, url: Optional[str] = None
    ) -> None:
        message: Dict[str, Any] = {"title": title, "body": body}
        if url:
            message["url"] = url
        self.send_payload_to_user(db, user=user, payload=json.dumps(message))

    def send_payload_to_user(self, db: Session, *, user: User, payload: str) -> None:
        subscriptions = crud.push_subscription.get_by_user(db, user_id=user.id)
        if not subscriptions:
            logger.warning(f"No subscriptions found for user: {user.username}")
            return

        for sub in subscriptions:
            self._send_to_browser(db, endpoint=sub.endpoint, p256dh=sub.p256dh, auth=sub.auth, payload=payload)

    def _send_to_browser(self, db: Session, *, endpoint: str, p256dh: str, auth: str, payload: str) -> None:
        if not self.enabled:
            logger.info("Push notifications disabled. Skipping push delivery.")
            return

        try:
            response = webpush(
                subscription_info={"endpoint": endpoint, "keys": {"p256dh": p256dh, "auth": auth}},
                data=payload,
                vapid_private_key=settings.VAPID_PRIVATE_KEY,
                vapid_claims={"sub": settings.VAPID_SUBJECT},
            )
            logger.info(f"Push sent successfully ({getattr(response, 'status_code', 'n/a')})")
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            if status_code in GONE_STATUS_CODES:
                logger.warning(f"{status_code} Gone: user unsubscribed. Removing from DB.")
                self._remove_endpoint(db, endpoint)
            elif status_code == 403:
                logger.error("403 Forbidden: Check your VAPID keys/Subject")
            else:
                logger.error(f"Unexpected Push Service Response: {status_code} {str(e)}")
        except Exception as e:
            logger.error(f"Error sending push: {str(e)}")

    def _remove_endpoint(self, db: Session, endpoint: str) -> None:
        try:
            with transactional(db):
                existing = crud.push_subscription.get_by_endpoint(db, endpoint=endpoint)
                if existing:
                    crud.push_subscription.remove(db, db_obj=existing)
        except Exception as e:
            logger.error(f"Failed to remove stale subscription: {str(e)}")


# Global instance
webpush_service = WebPushService()
