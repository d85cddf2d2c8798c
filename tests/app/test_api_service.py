"""Integration tests for service endpoints, the auth gate and the error envelope.

These tests verify:
- Root and health endpoints
- Bearer token enforcement on protected routes
- Failure envelope for validation, HTTP and unexpected errors
"""

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from afrisight.auth import CredentialService
from afrisight.errors import DirectoryError
from afrisight.users import UserRecord


def test_root(client):
    """Root reports the service name and status."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "AfriSight API"
    assert data["status"] == "running"
    assert "version" in data


def test_health_check(client):
    """All collaborators reachable gives healthy."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "datasetsLoaded": True,
        "userDirectoryOk": True,
        "sessionStoreOk": True,
        "activeSessions": 0,
    }


def test_health_degraded_when_directory_down(client, user_directory, monkeypatch):
    """A failing directory ping degrades health instead of failing it."""

    def failing_ping():
        raise DirectoryError.from_store_error(ServerSelectionTimeoutError("no servers"))

    monkeypatch.setattr(user_directory, "ping", failing_ping)

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["userDirectoryOk"] is False
    assert data["datasetsLoaded"] is True


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/predict/quick-stats"),
        ("post", "/predict/chat"),
        ("get", "/predict/chat/history"),
        ("get", "/explore/creators"),
        ("get", "/settings/profile"),
        ("get", "/events/scrape"),
        ("get", "/api/data/stats"),
        ("post", "/ai/prompt"),
    ],
)
def test_protected_routes_require_token(client, method, path):
    """Protected routes answer 401 with the envelope when no token is sent."""
    response = getattr(client, method)(path)

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Authorization header missing or malformed",
    }


def test_invalid_token_rejected(client):
    """A garbage bearer token is rejected."""
    response = client.get("/api/data/stats", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_non_bearer_scheme_rejected(client):
    response = client.get("/api/data/stats", headers={"Authorization": "Basic YWRhOnB3"})
    assert response.status_code == 401


def test_token_for_other_secret_rejected(client):
    user = UserRecord(id="x", email="x@example.com", password_hash="", name="X", creator_type="Other")
    token = CredentialService("another-secret", bcrypt_rounds=4).issue_token(user)

    response = client.get("/api/data/stats", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_validation_error_envelope(client):
    """Malformed bodies become 400 with details naming the field."""
    response = client.post("/auth/login", json={"email": "ada@example.com"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request"
    assert "password" in body["details"]


def test_unknown_route_envelope(client, auth_headers):
    response = client.get("/does-not-exist", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_unknown_route_without_token_rejected(client):
    """The token check runs before routing, so unknown paths also answer 401."""
    response = client.get("/does-not-exist")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Authorization header missing or malformed",
    }


def test_unknown_route_with_bad_token_rejected(client):
    response = client.delete("/nowhere", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_openapi_schema_is_public(client):
    assert client.get("/openapi.json").status_code == 200


def test_rejected_request_carries_cors_headers(client):
    response = client.get("/predict/quick-stats", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 401
    assert "access-control-allow-origin" in response.headers


def test_unexpected_error_envelope(app, datasets, monkeypatch):
    """Unhandled exceptions become a 500 envelope."""

    def broken(limit=10):
        raise KeyError("boom")

    monkeypatch.setattr(datasets, "top_afro_tracks", broken)

    with TestClient(app, raise_server_exceptions=False) as client:
        token = client.post(
            "/auth/signup",
            json={"email": "ada@example.com", "password": "pw123456", "name": "Ada", "creatorType": "Other"},
        ).json()["token"]
        response = client.get("/api/data/top-afro", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"] == "Internal server error"


def test_cors_preflight(client):
    response = client.options(
        "/predict/quick-stats",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
