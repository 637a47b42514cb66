"""Pytest configuration and fixtures."""

import os

# Point the app itself at SQLite unless a real database is configured
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from expense_tracker.database import Base, get_db  # noqa: E402
from expense_tracker.main import app  # noqa: E402

SQLITE_TEST_DATABASE_URL = "sqlite:///./test.db"


def derive_test_database_url(app_database_url: str) -> str:
    """Pick the database the tests may wipe.

    PostgreSQL gets a sibling database with a "_test" suffix; anything else uses
    the local SQLite file. Each test deletes every row, so a URL equal to a
    non-SQLite app database is refused.
    """
    if app_database_url.startswith("postgresql"):
        url = make_url(app_database_url)
        test_url = url.set(database=f"{url.database}_test").render_as_string(hide_password=False)
    else:
        test_url = SQLITE_TEST_DATABASE_URL

    if test_url == app_database_url and test_url != SQLITE_TEST_DATABASE_URL:
        raise RuntimeError(f"Refusing to run tests against the app database {make_url(test_url)!r}")
    return test_url


# Use test database - PostgreSQL in Docker, SQLite locally
SQLALCHEMY_DATABASE_URL = derive_test_database_url(os.environ["DATABASE_URL"])

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpass123"  # noqa: S105


class RegisteredUser(dict):
    """Registration payload that also stores the new user's id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from expense_tracker import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_user(client, username: str, email: str, password: str = TEST_PASSWORD):
    """Register a user through the API and return the payload with its id."""
    payload = {"username": username, "email": email, "password": password}
    response = client.post("/register", json=payload)
    assert response.status_code == 200, response.json()
    return RegisteredUser(payload, user_id=response.json()["userId"])


@pytest.fixture
def user(client):
    """Register the default test user."""
    return register_user(client, "testuser", "test@example.com")


@pytest.fixture
def other_user(client):
    """Register a second user for isolation checks."""
    return register_user(client, "otheruser", "other@example.com")
