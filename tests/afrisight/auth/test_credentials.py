"""Tests for password hashing and bearer tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from afrisight.auth import CredentialService, Identity
from afrisight.errors import AuthenticationError
from afrisight.users import UserRecord

SECRET = "test-secret"


@pytest.fixture
def service():
    return CredentialService(SECRET, ttl_hours=1, bcrypt_rounds=4)


@pytest.fixture
def user():
    return UserRecord(
        id="65f1c0ffee0000000000abcd",
        email="ada@example.com",
        password_hash="",
        name="Ada",
        creator_type="Musician",
    )


def test_requires_secret():
    with pytest.raises(ValueError):
        CredentialService("")


def test_hash_and_verify_password(service):
    """Hashes verify only against the original password."""
    hashed = service.hash_password("s3cret!")

    assert hashed != "s3cret!"
    assert hashed.startswith("$2b$04$")
    assert service.verify_password("s3cret!", hashed)
    assert not service.verify_password("wrong", hashed)


def test_verify_password_malformed_hash(service):
    """A corrupt stored hash is a mismatch, not an error."""
    assert service.verify_password("s3cret!", "not-a-bcrypt-hash") is False


def test_token_round_trip(service, user):
    """Issued tokens verify back to the same identity."""
    identity = service.verify_token(service.issue_token(user))

    assert identity == Identity(
        user_id="65f1c0ffee0000000000abcd",
        email="ada@example.com",
        name="Ada",
        creator_type="Musician",
    )


def test_token_claims(service, user):
    """Claims use camelCase keys and expire after the TTL."""
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    token = service.issue_token(user, now=now)

    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert claims["userId"] == user.id
    assert claims["creatorType"] == "Musician"
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] == int((now + timedelta(hours=1)).timestamp())


def test_zero_ttl_never_expires(user):
    service = CredentialService(SECRET, ttl_hours=0, bcrypt_rounds=4)
    token = service.issue_token(user, now=datetime(2000, 1, 1, tzinfo=timezone.utc))

    assert "exp" not in jwt.decode(token, SECRET, algorithms=["HS256"])
    assert service.verify_token(token).email == "ada@example.com"


def test_expired_token(service, user):
    """Tokens past their expiry are rejected."""
    token = service.issue_token(user, now=datetime.now(timezone.utc) - timedelta(hours=2))

    with pytest.raises(AuthenticationError) as exc_info:
        service.verify_token(token)
    assert exc_info.value.message == "Token expired"
    assert exc_info.value.status_code == 401


def test_tampered_token(service, user):
    """Changing the payload invalidates the signature."""
    header, _, signature = service.issue_token(user).split(".")
    forged_payload = jwt.encode(
        {"userId": "someone-else", "email": "x@example.com", "name": "X"}, "other-secret", algorithm="HS256"
    ).split(".")[1]

    with pytest.raises(AuthenticationError) as exc_info:
        service.verify_token(f"{header}.{forged_payload}.{signature}")
    assert exc_info.value.message == "Invalid token"


def test_wrong_secret(user):
    token = CredentialService("other-secret", bcrypt_rounds=4).issue_token(user)
    with pytest.raises(AuthenticationError):
        CredentialService(SECRET, bcrypt_rounds=4).verify_token(token)


def test_garbage_token(service):
    with pytest.raises(AuthenticationError):
        service.verify_token("not.a.jwt")


def test_missing_identity_claims(service):
    """A correctly signed token without userId is rejected."""
    token = jwt.encode({"email": "ada@example.com", "name": "Ada"}, SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError) as exc_info:
        service.verify_token(token)
    assert exc_info.value.details == "Missing identity claims"
