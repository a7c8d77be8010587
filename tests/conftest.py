"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read once and cached, so the environment must be prepared
# before anything from src is imported.
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="blog-cms-uploads-")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's details."""

    def __init__(self, *args, user_id: int, username: str, email: str, token: str, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username
        self.email = email
        self.token = token


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


def _signup(client, username: str, email: str, password: str = "testpass123") -> AuthHeaders:
    """Sign a user up and return auth headers carrying their details."""
    response = client.post(
        "/api/auth/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        username=username,
        email=email,
        token=token,
    )


@pytest.fixture
def make_user(client):
    """Factory that signs up users and returns their auth headers."""

    def factory(username: str, email: str, password: str = "testpass123") -> AuthHeaders:
        return _signup(client, username, email, password)

    return factory


@pytest.fixture
def auth_headers(make_user):
    """Create a user and return auth headers with user info."""
    return make_user("testuser", "test@example.com")


@pytest.fixture
def other_auth_headers(make_user):
    """Create a second, unrelated user."""
    return make_user("otheruser", "other@example.com")


@pytest.fixture
def upload_dir():
    """Directory the app writes uploaded images to."""
    from src.config import get_settings

    return get_settings().upload_dir
