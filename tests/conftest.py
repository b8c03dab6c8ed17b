import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from hightribe.config import Settings
from hightribe.domain.models.user import User
from hightribe.infrastructure.database import Database
from hightribe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from hightribe.main import create_app

PASSWORD = "secret123"


def registration(**overrides):
    """A valid /api/auth registration body."""
    body = {
        "fullName": "Ada Lovelace",
        "email": "ada@example.com",
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "phone": "5550001111",
    }
    body.update(overrides)
    return body


def contains_key(value, key):
    """True if ``key`` appears anywhere in a decoded JSON document."""
    if isinstance(value, dict):
        return key in value or any(contains_key(v, key) for v in value.values())
    if isinstance(value, list):
        return any(contains_key(v, key) for v in value)
    return False


@pytest.fixture
def settings():
    return Settings(ENVIRONMENT="test", SECRET_KEY="test-secret", DATABASE_URL="sqlite://")


@pytest.fixture
def database():
    """In-memory SQLite shared by every connection of the test."""
    db = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.init()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    yield from database.session()


@pytest.fixture
def repo(session):
    return SQLAlchemyUserRepository(session, User)


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register a user through the API and return the response's ``data``."""
    def _register(**overrides):
        response = client.post("/api/auth", json=registration(**overrides))
        assert response.status_code == 201, response.json()
        return response.json()["data"]
    return _register
