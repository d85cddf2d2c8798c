"""Integration tests for /auth signup and login."""

import jwt

from afrisight.auth import CredentialService

SECRET = "test-secret"


def _signup(client, **overrides):
    body = {"email": "ada@example.com", "password": "s3cret-pass", "name": "Ada", "creatorType": "Musician"}
    body.update(overrides)
    return client.post("/auth/signup", json=body)


def test_signup_returns_token(client, user_directory):
    """Signup stores a hashed password and returns a token for the account."""
    response = _signup(client)

    assert response.status_code == 200
    claims = jwt.decode(response.json()["token"], SECRET, algorithms=["HS256"])
    assert claims["email"] == "ada@example.com"
    assert claims["name"] == "Ada"
    assert claims["creatorType"] == "Musician"

    stored = user_directory.find_by_email("ada@example.com")
    assert stored.id == claims["userId"]
    assert stored.password_hash != "s3cret-pass"
    assert CredentialService(SECRET, bcrypt_rounds=4).verify_password("s3cret-pass", stored.password_hash)


def test_signup_duplicate_email(client):
    """A second signup with the same email (any case) is rejected."""
    _signup(client)

    response = _signup(client, email="ADA@example.com", name="Someone Else")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email already exists"}


def test_signup_invalid_creator_type(client):
    response = _signup(client, creatorType="DJ")

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid creatorType. Must be one of:")


def test_signup_missing_fields(client):
    """Missing required fields fail validation."""
    response = client.post("/auth/signup", json={"email": "ada@example.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_login(client):
    """Correct credentials return a token for the same account."""
    signup_claims = jwt.decode(_signup(client).json()["token"], SECRET, algorithms=["HS256"])

    response = client.post("/auth/login", json={"email": "Ada@Example.com", "password": "s3cret-pass"})

    assert response.status_code == 200
    claims = jwt.decode(response.json()["token"], SECRET, algorithms=["HS256"])
    assert claims["userId"] == signup_claims["userId"]


def test_login_wrong_password_and_unknown_email_look_alike(client):
    """Both failures give the same 401 response."""
    _signup(client)

    wrong_password = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope"})
    unknown_email = client.post("/auth/login", json={"email": "nobody@example.com", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"success": False, "error": "Invalid credentials"}


def test_token_grants_access(client, auth_headers):
    """A freshly issued token opens protected routes."""
    response = client.get("/api/data/stats", headers=auth_headers)
    assert response.status_code == 200
