from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.push_subscription import PushSubscription
from app.schemas.webpush import Subscription

class CRUDPushSubscription(CRUDBase[PushSubscription, Subscription, Subscription]):

    def get_by_endpoint(self, db: Session, *, endpoint: str) -> Optional[PushSubscription]:
        return db.query(PushSubscription).filter(PushSubscription.endpoint == endpoint).first()

    def get_by_user(self, db: Session, *, user_id: int) -> List[PushSubscription]:
        return (
            db.query(PushSubscription)
            .filter(PushSubscription.user_id == user_id)
            .order_by(PushSubscription.id)
            .all()
        )

    def create_for_user(self, db: Session, *, obj_in: Subscription, user_id: int) -> PushSubscription:
        db_obj = PushSubscription(
            endpoint=obj_in.endpoint,
            p256dh=obj_in.keys.p256dh,
            auth=obj_in.keys.auth,
            user_id=user_id,
        )
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

push_subscription = CRUDPushSubscription(PushSubscription)
