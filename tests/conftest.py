"""Pytest configuration and fixtures."""

import os

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
# The application engine reads this at import time
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from pocketbook.config import get_settings  # noqa: E402
from pocketbook.database import Base, get_db  # noqa: E402
from pocketbook.main import app  # noqa: E402
from pocketbook.models.category import Category  # noqa: E402
from pocketbook.models.enums import Role  # noqa: E402
from pocketbook.models.user import User  # noqa: E402
from pocketbook.services.auth import create_token, get_password_hash, user_claims  # noqa: E402

PASSWORD = "testpass123"  # noqa: S105
PASSWORD_HASH = get_password_hash(PASSWORD)
EXPIRED = timedelta(hours=-1)

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


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


def issue_token(user: User, expires_in: timedelta, **overrides) -> str:
    """Sign a session token for `user` with the application key."""
    settings = get_settings()
    claims = user_claims(user)
    claims.update(overrides)
    return create_token(claims, expires_in, settings.jwt_secret, settings.jwt_algorithm)


@pytest.fixture
def make_user(db):
    """Factory inserting users directly into the database."""

    def _make_user(username: str, email: str | None = None, role: Role = Role.REGULAR) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=PASSWORD_HASH,
            role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def login_as(client, db):
    """Attach session cookies for a user to the test client."""

    def _login_as(user: User, access_expired: bool = False, refresh_expired: bool = False):
        access_token = issue_token(user, EXPIRED if access_expired else timedelta(hours=1))
        refresh_token = issue_token(user, EXPIRED if refresh_expired else timedelta(days=7))
        user.refresh_token = refresh_token
        db.commit()
        client.cookies.set("accessToken", access_token)
        client.cookies.set("refreshToken", refresh_token)
        return access_token, refresh_token

    return _login_as


@pytest.fixture
def regular_user(make_user):
    return make_user("tester")


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", role=Role.ADMIN)


@pytest.fixture
def categories(db):
    """Three categories in insertion order."""
    rows = [
        Category(type="food", color="red"),
        Category(type="health", color="green"),
        Category(type="travel", color="blue"),
    ]
    db.add_all(rows)
    db.commit()
    return {category.type: category for category in rows}
