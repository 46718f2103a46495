"""Shared test fixtures and configuration."""
import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from officeops.main import app
from officeops.db.base import Base
from officeops.db.models import Room
from officeops.api.deps import get_db
from officeops.core.rate_limit import limiter
from tests.utils import auth_headers, REGULAR_USER_ID, APPROVER_USER_ID


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    if "rate_limit" in request.keywords:
        limiter.enabled = True
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_client(client):
    """Client acting as a regular staff member."""
    client.headers.update(auth_headers(REGULAR_USER_ID, role=2))
    return client


@pytest.fixture
def approver_client(db_session, client):
    """Separate client acting as an admin who may approve bookings."""
    with TestClient(app) as test_client:
        test_client.headers.update(auth_headers(APPROVER_USER_ID, role=1))
        yield test_client


@pytest.fixture
def room(db_session):
    """A bookable room."""
    room = Room(name="Board Room", capacity=12, presentation=True, created_at=datetime.now(timezone.utc))
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room
