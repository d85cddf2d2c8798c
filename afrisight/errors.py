"""Exception hierarchy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to, a short message for the
``error`` field of the response envelope, and optional ``details`` (usually
the upstream error text).
"""

from typing import Optional


class AfriSightError(Exception):
    """Base class for all domain errors surfaced through the API."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """Initialize AfriSightError.

        Args:
            message: Human-readable error message
            details: Optional extra information (e.g. upstream error text)
            original_error: Exception that caused this error (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.original_error = original_error


class ConfigurationError(AfriSightError):
    """Raised at boot when a mandatory setting is missing or invalid."""

    @classmethod
    def from_missing_key(cls, key: str) -> "ConfigurationError":
        return cls(f"{key} environment variable not set")

    @classmethod
    def from_config_file(cls, path: str, reason: str) -> "ConfigurationError":
        return cls(f"Cannot use config file {path}", details=reason)


class ValidationError(AfriSightError):
    """Malformed or missing request fields, invalid enum values."""

    status_code = 400


class ConflictError(ValidationError):
    """A unique field (email) is already taken."""


class AuthenticationError(AfriSightError):
    """Missing, malformed or expired credentials."""

    status_code = 401


class NotFoundError(AfriSightError):
    """Requested entity does not exist (or is not visible to the caller)."""

    status_code = 404


class SessionNotFoundError(NotFoundError):
    """Chat session is absent or owned by someone else.

    Both cases produce the same response.
    """

    def __init__(self, session_id: str):
        super().__init__("Session not found or access denied")
        self.session_id = session_id


class UpstreamError(AfriSightError):
    """A collaborator (document store, AI gateway, external site) failed."""

    status_code = 500


class GatewayError(UpstreamError):
    """The generative text gateway call failed."""

    @classmethod
    def from_api_error(cls, error: Exception) -> "GatewayError":
        """Create error for API failures (timeout, rate limit, bad key...)."""
        return cls(
            "Failed to generate AI response",
            details=f"{type(error).__name__}: {error}",
            original_error=error,
        )


class ScrapeError(UpstreamError):
    """Fetching an event listing page failed."""

    @classmethod
    def from_status(cls, source: str, status_code: int) -> "ScrapeError":
        return cls(
            f"Failed to scrape {source} events",
            details=f"Failed to fetch {source} data: {status_code}",
        )

    @classmethod
    def from_transport_error(cls, source: str, error: Exception) -> "ScrapeError":
        return cls(
            f"Failed to scrape {source} events",
            details=str(error),
            original_error=error,
        )


class DirectoryError(UpstreamError):
    """The user document store failed."""

    @classmethod
    def from_store_error(cls, error: Exception) -> "DirectoryError":
        return cls(
            "User directory unavailable",
            details=str(error),
            original_error=error,
        )
