"""Pytest configuration and fixtures.

Every test gets a fresh app on in-memory SQLite. Hashing uses a cheap
pbkdf2 setting so the suite stays fast.
"""

import pytest

from user_microservice import create_app, db
from user_microservice.repository import UserRepository
from user_microservice.security import PasswordHasher
from user_microservice.service import UserService

SERVICE_USER = "user"
SERVICE_PASSWORD = "test-service-password"
TEST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def app_overrides() -> dict:
    """Extra config for the ``app`` fixture; override in a test class or module."""
    return {}


@pytest.fixture
def app(app_overrides):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "BASIC_AUTH_USERNAME": SERVICE_USER,
        "BASIC_AUTH_PASSWORD": SERVICE_PASSWORD,
        "PASSWORD_HASH_METHOD": TEST_HASH_METHOD,
        "LOG_LEVEL": "WARNING",
        **app_overrides,
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth():
    """Service account credentials for the test client's ``auth=`` argument."""
    return (SERVICE_USER, SERVICE_PASSWORD)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(method=TEST_HASH_METHOD)


@pytest.fixture
def repo(app):
    """Repository bound to a pushed app context. Do not mix with ``client``."""
    with app.app_context():
        yield UserRepository(db.session)


@pytest.fixture
def service(repo, hasher) -> UserService:
    return UserService(repo, hasher)
