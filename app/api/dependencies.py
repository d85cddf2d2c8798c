"""FastAPI dependencies resolving the services attached to ``app.state``."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi import Limiter
from slowapi.util import get_remote_address

from afrisight.analysis import PredictiveAnalysis
from afrisight.auth import CredentialService, Identity
from afrisight.chat import ChatSessionStore
from afrisight.datasets import DatasetProvider
from afrisight.errors import AuthenticationError
from afrisight.events import EventScraper
from afrisight.genai import GenerativeTextGateway
from afrisight.users import UserDirectory
from afrisight.utils.config import Settings

# Rate limiter (per client address)
limiter = Limiter(key_func=get_remote_address)

bearer_scheme = HTTPBearer(auto_error=False)


def chat_limit_key(request: Request) -> str:
    """Client address prefixed with the serving app's chat limit, e.g. ``10/minute@127.0.0.1``."""
    return f"{request.app.state.settings.chat_rate_limit}@{get_remote_address(request)}"


def chat_rate_limit(key: str) -> str:
    """slowapi limit provider; reads the limit back out of ``chat_limit_key``."""
    return key.split("@", 1)[0]


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> ChatSessionStore:
    return request.app.state.session_store


def get_datasets(request: Request) -> DatasetProvider:
    return request.app.state.datasets


def get_gateway(request: Request) -> GenerativeTextGateway:
    return request.app.state.gateway


def get_analysis(request: Request) -> PredictiveAnalysis:
    return request.app.state.analysis


def get_scraper(request: Request) -> EventScraper:
    return request.app.state.scraper


def get_user_directory(request: Request) -> UserDirectory:
    return request.app.state.user_directory


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: CredentialService = Depends(get_credentials),
) -> Identity:
    """Verify the ``Authorization: Bearer`` token of the request.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authorization header missing or malformed")
    return service.verify_token(credentials.credentials)
