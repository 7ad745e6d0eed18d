"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
# Inject sys.path for reliable pytest imports without installation
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # => .../apps/api

import dataclasses

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from notes_api.config import Settings
from notes_api.db.seed import DEMO_PASSWORD, SeedReport, seed_demo_data
from notes_api.main import create_app

TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789abcdef"
TEST_PEPPER = "test-token-pepper"


def make_settings(**overrides) -> Settings:
    """Test settings: in-memory SQLite, cheap bcrypt, plain logs."""
    base = Settings(
        jwt_secret=TEST_JWT_SECRET,
        token_pepper=TEST_PEPPER,
        database_url="sqlite://",
        app_env="test",
        bcrypt_rounds=4,
        json_logs=False,
        log_level="WARNING",
    )
    return dataclasses.replace(base, **overrides)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Fresh app per test; each one gets its own in-memory database."""
    application = create_app(settings)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app: FastAPI) -> Session:
    """Session bound to the app's engine (same in-memory database)."""
    session = app.state.sessionmaker()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db_session: Session, settings: Settings) -> SeedReport:
    """Tenants acme and globex (free), one admin and one member each, two notes each."""
    return seed_demo_data(db_session, rounds=settings.bcrypt_rounds)


@pytest.fixture
def login(client: TestClient, seeded: SeedReport):
    """Factory: login(email, password="password") -> raw bearer token.

    The auth-token cookie set by the response is dropped so that every
    request in a test authenticates only through the headers it passes.
    """

    def _login(email: str, password: str = DEMO_PASSWORD) -> str:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return response.json()["data"]["token"]

    return _login


@pytest.fixture
def auth_headers(login):
    """Factory: auth_headers(email) -> Authorization header for a fresh login."""

    def _headers(email: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {login(email)}"}

    return _headers
