import os

# Must be set before the app modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

import datetime as dt  # noqa: E402

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.orm.session import Session  # noqa: E402

from app.core.security import hash_password  # noqa: E402
from app.database.db import Base, get_db, make_engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.events import Event  # noqa: E402
from app.models.users import User, UserRole  # noqa: E402

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"
engine: Engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Give every test a fresh schema."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route the registration lock to an in-process fake Redis."""
    monkeypatch.setattr("app.services.registrations.get_redis_client", lambda: fake_redis)
    return fake_redis


def make_user(db: Session, username: str, password: str = "secret123", name: str | None = None) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password),
        name=name or username.title(),
        role=UserRole.USER.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event(db: Session, *, title: str = "Test Event", capacity: int = 10, **fields) -> Event:
    values = {
        "description": "An event",
        "date": dt.date(2025, 5, 1),
        "location": "Main Hall",
        "attendees": 0,
    }
    values.update(fields)
    event = Event(title=title, capacity=capacity, **values)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def alice(db_session: Session) -> User:
    return make_user(db_session, "alice", name="Alice")


@pytest.fixture
def bob(db_session: Session) -> User:
    return make_user(db_session, "bob", name="Bob")
