import os

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PUSH_NOTIFICATIONS_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import crud, models  # noqa: F401
from app.core.clock import utcnow
from app.core.config import settings
from app.core.security import create_access_token
from app.db.database import Base, SessionLocal, engine, get_db, transactional
from app.main import app
from app.models.event import EventStatus
from app.models.user import UserRole
from app.schemas.event import EventCreate
from app.schemas.user import UserCreate


@pytest.fixture
def db():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def storage_root(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_ROOT_DIR", str(tmp_path / "storage"))
    return tmp_path / "storage"


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db: Session, username: str, role: UserRole = UserRole.USER):
    user_in = UserCreate(firstname=username.capitalize(), lastname="Tester", username=username, password="secret123")
    with transactional(db):
        return crud.user.create(db, obj_in=user_in, role=role)


def make_event(db: Session, owner, status: EventStatus = EventStatus.DRAFT, deadline_in_days: int = 5, name: str = "Beach cleanup"):
    now = utcnow()
    event_in = EventCreate(
        name=name,
        description="Bring gloves",
        date_deadline=now + timedelta(days=deadline_in_days),
        start_date=now + timedelta(days=10),
        end_date=now + timedelta(days=11),
    )
    with transactional(db):
        event = crud.event.create_with_owner(db, obj_in=event_in, owner_id=owner.id)
        if status != EventStatus.DRAFT:
            event = crud.event.update(db, db_obj=event, obj_in={"status": status})
    return event


@pytest.fixture
def volunteer(db):
    return make_user(db, "volunteer")


@pytest.fixture
def owner(db):
    return make_user(db, "owner")


@pytest.fixture
def admin(db):
    return make_user(db, "admin", role=UserRole.ADMIN)


@pytest.fixture
def approved_event(db, owner):
    return make_event(db, owner, status=EventStatus.APPROVED)


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.username)}"}
