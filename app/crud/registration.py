from typing import Any, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Query, Session
from app.crud.base import CRUDBase
from app.models.event import Event
from app.models.registration import Registration, RegistrationStatus
from app.models.user import User
from app.schemas.registration import RegistrationCreate, RegistrationFilter, RegistrationUpdate

class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, RegistrationUpdate]):

    def get_by_user_and_event(self, db: Session, *, user_id: int, event_id: int) -> Optional[Registration]:
        return db.query(Registration).filter(
            Registration.user_id == user_id,
            Registration.event_id == event_id
        ).first()

    def create_pending(self, db: Session, *, user_id: int, event_id: int) -> Registration:
        obj_in = RegistrationCreate(user_id=user_id, event_id=event_id).model_dump()
        obj_in["status"] = RegistrationStatus.PENDING
        return self.create(db, obj_in=obj_in)

    def _with_details(self, db: Session) -> Query:
        # Rows are (Registration, username, event_name, event_owner_id)
        return (
            db.query(Registration, User.username, Event.name, Event.owner_id)
            .join(User, User.id == Registration.user_id)
            .join(Event, Event.id == Registration.event_id)
        )

    def get_with_details(self, db: Session, *, id: int) -> Optional[Any]:
        return self._with_details(db).filter(Registration.id == id).first()

    def build_list_query(
        self, db: Session, *, filters: RegistrationFilter, visible_to: Optional[int] = None
    ) -> Query:
        """
        ``visible_to`` keeps the registrations where that user is the volunteer
        or the owner of the event; ``None`` keeps everything.
        """
        query = self._with_details(db)

        if filters.status is not None:
            query = query.filter(Registration.status == filters.status)
        if filters.event_id is not None:
            query = query.filter(Registration.event_id == filters.event_id)
        if filters.user_id is not None:
            query = query.filter(Registration.user_id == filters.user_id)

        if visible_to is not None:
            query = query.filter(
                or_(Registration.user_id == visible_to, Event.owner_id == visible_to)
            )

        return query.order_by(Registration.created_at.desc(), Registration.id.desc())

    def get_filtered(
        self,
        db: Session,
        *,
        filters: RegistrationFilter,
        visible_to: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Any]:
        query = self.build_list_query(db, filters=filters, visible_to=visible_to)
        return query.offset(skip).limit(limit).all()

registration = CRUDRegistration(Registration)
