"""
API Endpoint tests.

Tests cover:
- POST /api/login - Credential exchange
- POST /api/stats - Authenticated statistics
- GET /health - Liveness
- Error mapping for unknown routes and unexpected failures

These tests use FastAPI TestClient over an app with an injected
authentication service, so no environment configuration is needed.
"""

from datetime import datetime
from unittest.mock import patch

import jwt
import pytest
from fastapi.testclient import TestClient

from conftest import TEST_SECRET
from matrixstats.main import create_app


# =============================================================================
# Login
# =============================================================================


def test_login_success(client):
    response = client.post("/api/login", json={"username": "demo", "password": "demo"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"]
    claims = jwt.decode(data["token"], TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims["sub"] == "demo"


def test_login_accepts_identifier_and_secret(client):
    """Test the identifier/secret spelling of the login body."""
    response = client.post("/api/login", json={"identifier": "alice", "secret": "wonderland"})

    assert response.status_code == 200
    assert response.json()["token"]


def test_login_invalid_credentials(client):
    response = client.post("/api/login", json={"username": "demo", "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid credentials"}


@pytest.mark.parametrize("payload", [{}, {"username": "demo"}, {"username": 1, "password": []}])
def test_login_malformed_body(client, payload):
    response = client.post("/api/login", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False


# =============================================================================
# Stats
# =============================================================================


def test_stats_success(client, auth_header):
    response = client.post(
        "/api/stats", json={"matrices": [[[5, 0], [0, 5]]]}, headers=auth_header
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["maxValue"] == 5
    assert data["minValue"] == 0
    assert data["promedio"] == 2.5
    assert data["totalSum"] == 10
    assert data["isDiagonal"] is True
    assert data["totalElements"] == 4
    assert data["message"]


def test_stats_mixed_cells(client, auth_header):
    """Test a batch mixing numbers, numeric strings and junk."""
    matrices = [[[1, "x"], [2, 3]], [["0.1", 0.2]]]

    response = client.post("/api/stats", json={"matrices": matrices}, headers=auth_header)

    data = response.json()
    assert data["totalElements"] == 5
    assert data["totalSum"] == 6.3
    assert data["isDiagonal"] is False


def test_stats_overflowing_sum_returns_null(client, auth_header):
    """Test that a sum past the float range still answers 200."""
    response = client.post(
        "/api/stats", json={"matrices": [[[1e308, 1e308]]]}, headers=auth_header
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["maxValue"] == 1e308
    assert data["totalSum"] is None
    assert data["promedio"] is None
    assert data["totalElements"] == 2


def test_stats_without_token(client):
    with patch("matrixstats.modules.api.pipeline.aggregate") as aggregate_mock:
        response = client.post("/api/stats", json={"matrices": [[[1]]]})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Authorization token required"}
    aggregate_mock.assert_not_called()


def test_stats_with_invalid_token(client):
    response = client.post(
        "/api/stats",
        json={"matrices": [[[1]]]},
        headers={"Authorization": "Bearer not.a.token"},
    )

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Invalid token"}


def test_stats_with_expired_token(client, auth_header, clock):
    clock.advance(24 * 60 * 60)

    response = client.post("/api/stats", json={"matrices": [[[1]]]}, headers=auth_header)

    assert response.status_code == 403
    assert response.json()["message"] == "Invalid token"


def test_stats_token_reusable(client, auth_header):
    """Test that the same token authorizes repeated calls."""
    for _ in range(3):
        response = client.post("/api/stats", json={"matrices": [[[2]]]}, headers=auth_header)
        assert response.status_code == 200


@pytest.mark.parametrize(
    "payload",
    [{}, {"matrices": []}, {"matrices": "nope"}, {"matrices": {"m": [[1]]}}, [[[1]]]],
)
def test_stats_malformed_batch(client, auth_header, payload):
    response = client.post("/api/stats", json=payload, headers=auth_header)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "No valid matrices were provided"}


def test_stats_auth_checked_before_body(client):
    """Test that a bad body without a token is reported as missing token."""
    response = client.post("/api/stats", content=b"{broken")

    assert response.status_code == 401


def test_stats_internal_error_is_generic(client, auth_header):
    with patch(
        "matrixstats.modules.api.pipeline.aggregate",
        side_effect=RuntimeError("secret internals"),
    ):
        response = client.post("/api/stats", json={"matrices": [[[1]]]}, headers=auth_header)

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}
    assert "secret internals" not in response.text


# =============================================================================
# Health and routing
# =============================================================================


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "Matrixstats API"
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found"}


def test_uninitialized_service_returns_503():
    """Test that requests before the auth stack exists are rejected."""
    app = create_app()

    response = TestClient(app).post("/api/login", json={"username": "demo", "password": "demo"})

    assert response.status_code == 503
    assert response.json()["success"] is False


def test_lifespan_builds_auth_service(monkeypatch):
    """Test that startup wires the auth stack from configuration."""
    monkeypatch.setenv("JWT_SECRET", "lifespan-secret-that-is-long-enough")
    monkeypatch.setenv("AUTH_CREDENTIALS", "ops:pw")

    with TestClient(create_app()) as client:
        response = client.post("/api/login", json={"username": "ops", "password": "pw"})

    assert response.status_code == 200
