"""Fixtures for the HTTP API tests.

The app is built with a mongomock user directory, the recording fake
gateway and a scraper served from canned pages, so no test touches the
network or a real database.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from afrisight.chat import ChatSessionStore
from afrisight.users import UserDirectory
from afrisight.utils.config import Settings
from app.api.dependencies import limiter
from app.api.main import create_app

PASSWORD = "s3cret-pass"


@pytest.fixture(scope="session")
def log_dir(tmp_path_factory):
    return str(tmp_path_factory.mktemp("logs"))


@pytest.fixture
def settings(log_dir):
    return Settings(
        jwt_secret="test-secret",
        googleai_api_key="test-key",
        bcrypt_rounds=4,
        chat_rate_limit="1000/minute",
        log_dir=log_dir,
    )


@pytest.fixture
def user_directory():
    return UserDirectory(mongomock.MongoClient()["afrisight"]["users"])


@pytest.fixture
def session_store():
    return ChatSessionStore()


@pytest.fixture
def app(settings, user_directory, fake_gateway, datasets, scraper_factory, session_store):
    return create_app(
        settings=settings,
        user_directory=user_directory,
        gateway=fake_gateway,
        datasets=datasets,
        scraper=scraper_factory(),
        session_store=session_store,
    )


@pytest.fixture
def client(app):
    """TestClient with startup/shutdown events and a fresh rate limiter."""
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    limiter.reset()


@pytest.fixture
def signup(client):
    """Register an account and return its Authorization header."""

    def register(email="ada@example.com", name="Ada", creator_type="Musician", password=PASSWORD):
        response = client.post(
            "/auth/signup",
            json={"email": email, "password": password, "name": name, "creatorType": creator_type},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return register


@pytest.fixture
def auth_headers(signup):
    return signup()
