import os

# Settings are cached on first import, so configure them before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_studio_booking.db")
os.environ.setdefault("BOOKING_WRITES_PER_MINUTE", "1000")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import get_db
from app.main import app
from app.models import Base, User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def customer(db):
    user = User(id=uuid.uuid4(), email="customer@example.com", full_name="Ada Customer")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other_customer(db):
    user = User(id=uuid.uuid4(), email="other@example.com", full_name="Other Customer")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def admin(db):
    user = User(id=uuid.uuid4(), email="studio@example.com", full_name="Studio Admin", is_admin=True)
    db.add(user)
    db.commit()
    return user


