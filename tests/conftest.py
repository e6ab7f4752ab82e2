"""
Pytest configuration and fixtures for the test suite.
"""
import os
import tempfile
import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

# Set test environment before importing app
os.environ["ENV"] = "development"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-purposes-only-32chars"
os.environ["LLM_API_KEY"] = "test-api-key"
os.environ["LLM_API_BASE"] = "https://llm.test"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="meeting-tracker-uploads-")

from meeting_tracker.main import app
from meeting_tracker.db.base import Base
from meeting_tracker.core.deps import get_db
from meeting_tracker.models.user import User
from meeting_tracker.models.meeting import Meeting
from meeting_tracker.models.action_item import ActionItem
from meeting_tracker.services.auth import hash_password, issue_token


# Use SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite:///./test.db"
)

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in SQLALCHEMY_TEST_DATABASE_URL else {},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db_with_session():
        """Return the test database session."""
        yield db

    app.dependency_overrides[get_db] = override_get_db_with_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a test user."""
    user = User(
        username="testuser",
        password_hash=hash_password("TestPassword123!"),
        display_name="Test User",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authentication headers for test user."""
    token = issue_token(test_user)
    return {"Authorization": f"Bearer {token.access_token}"}


@pytest.fixture
def authenticated_client(client: TestClient, auth_headers: dict) -> TestClient:
    """Create an authenticated test client."""
    client.headers.update(auth_headers)
    return client


@pytest.fixture
def test_meeting(db: Session, test_user: User) -> Meeting:
    """Create a meeting owned by the test user."""
    meeting = Meeting(
        user_id=test_user.id,
        title="Sprint Planning",
        description="Planning for the next sprint",
        status="completed",
    )
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    return meeting


@pytest.fixture
def other_user(db: Session) -> User:
    """Create another test user."""
    user = User(
        username="otheruser",
        password_hash=hash_password("OtherPassword123!"),
        display_name="Other User",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user_meeting(db: Session, other_user: User) -> Meeting:
    """Create a meeting owned by another user."""
    meeting = Meeting(
        user_id=other_user.id,
        title="Other User's Meeting",
    )
    db.add(meeting)
    db.commit()
    db.refresh(meeting)
    return meeting


@pytest.fixture
def test_action_items(db: Session, test_meeting: Meeting, test_user: User) -> list:
    """Create two action items in the test meeting."""
    items = [
        ActionItem(
            meeting_id=test_meeting.id,
            user_id=test_user.id,
            action_item="Prepare the release notes",
            priority="High",
            status="Not Started",
            assigned_to="Alice",
            category="Task",
        ),
        ActionItem(
            meeting_id=test_meeting.id,
            user_id=test_user.id,
            action_item="Write release notes draft",
            priority="Medium",
            status="Not Started",
            assigned_to="Alice",
        ),
    ]
    db.add_all(items)
    db.commit()
    for item in items:
        db.refresh(item)
    return items
