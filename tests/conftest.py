"""
Shared pytest fixtures for Matrixstats tests.

This module provides common fixtures including:
- A controllable clock for token expiry tests
- Auth service wired with fixed credentials
- FastAPI test client over an app with the injected auth service
"""

import pytest
from fastapi.testclient import TestClient

from matrixstats.main import create_app
from matrixstats.modules.auth import AuthFactory, JWTTokenService

TEST_SECRET = "test-signing-secret-with-enough-length"
START_TIME = 1_700_000_000


class FakeClock:
    """Callable returning a settable UNIX time."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """A clock frozen at START_TIME."""
    return FakeClock()


@pytest.fixture
def token_service(clock):
    """Token service using the fake clock."""
    return JWTTokenService(secret=TEST_SECRET, clock=clock)


@pytest.fixture
def auth_service(clock):
    """Auth service accepting demo/demo and alice/wonderland."""
    return AuthFactory.build_for_testing(
        credentials={"demo": "demo", "alice": "wonderland"},
        secret=TEST_SECRET,
        clock=clock,
    )


@pytest.fixture
def app(auth_service):
    return create_app(auth_service=auth_service)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_header(client):
    """Authorization header for a freshly logged-in demo user."""
    response = client.post("/api/login", json={"username": "demo", "password": "demo"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
