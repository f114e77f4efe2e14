"""Shared fixtures: settings, in-memory services, and an HTTP client."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from tests.fakes import TEST_PASSWORD, TEST_SALT, TEST_SECRET, create_fake_services
from whattowatch.api import create_app
from whattowatch.config import Settings
from whattowatch.schemas import CreateUserDto
from whattowatch.security import Identity, TokenService


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        salt=TEST_SALT,
        allowed_origins="http://localhost:3000",
    )


@pytest.fixture
def services():
    return create_fake_services(TEST_SALT)


@pytest.fixture
def client(settings, services) -> TestClient:
    return TestClient(create_app(settings, services=services))


@pytest.fixture
def tokens(settings) -> TokenService:
    return TokenService(settings.jwt_secret, settings.jwt_algorithm, settings.jwt_expires_minutes)


@pytest.fixture
def make_user(services):
    """Create a user directly in the fake store."""

    def _make_user(email: str = "author@example.com", name: str = "Author"):
        dto = CreateUserDto(email=email, name=name, password=TEST_PASSWORD)
        return asyncio.run(services.users.create(dto))

    return _make_user


@pytest.fixture
def auth_headers(tokens):
    """Bearer header for a user record."""

    def _auth_headers(user) -> dict:
        token = tokens.create_token(Identity(id=str(user.id), email=user.email))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def author(make_user):
    return make_user()


@pytest.fixture
def stranger(make_user):
    return make_user(email="stranger@example.com", name="Stranger")
