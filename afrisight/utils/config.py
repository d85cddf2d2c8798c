"""Application settings.

Values are resolved once at startup, lowest priority first:

1. field defaults below;
2. an optional YAML file (path in ``AFRISIGHT_CONFIG``), nested keys in dot
   notation, e.g. ``genai.model``;
3. environment variables (a ``.env`` file in the working directory is
   loaded first).

A missing gateway API key or token signing secret is fatal.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from afrisight.errors import ConfigurationError
from afrisight.utils.config_loader import ConfigLoader

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[1] / "data"

# field name -> (environment variable, YAML dot key)
_SOURCES: Dict[str, Tuple[str, str]] = {
    "mongodb_uri": ("MONGODB_URI", "mongodb.uri"),
    "mongodb_database": ("MONGODB_DATABASE", "mongodb.database"),
    "jwt_secret": ("JWT_SECRET", "auth.jwt_secret"),
    "jwt_ttl_hours": ("JWT_TTL_HOURS", "auth.jwt_ttl_hours"),
    "bcrypt_rounds": ("BCRYPT_ROUNDS", "auth.bcrypt_rounds"),
    "googleai_api_key": ("GOOGLEAI_API_KEY", "genai.api_key"),
    "genai_model": ("GENAI_MODEL", "genai.model"),
    "port": ("PORT", "server.port"),
    "cors_origins": ("CORS_ORIGINS", "server.cors_origins"),
    "chat_rate_limit": ("CHAT_RATE_LIMIT", "server.chat_rate_limit"),
    "data_dir": ("DATA_DIR", "data.dir"),
    "log_level": ("LOG_LEVEL", "logging.level"),
    "log_dir": ("LOG_DIR", "logging.dir"),
    "max_sessions_per_owner": ("MAX_SESSIONS_PER_OWNER", "chat.max_sessions_per_owner"),
}

_REQUIRED = ("googleai_api_key", "jwt_secret")


class Settings(BaseModel):
    """Resolved runtime configuration.

    Attributes:
        mongodb_uri: Document store connection string
        mongodb_database: Database holding the ``users`` collection
        jwt_secret: HS256 signing secret for bearer tokens
        jwt_ttl_hours: Token lifetime; 0 disables expiry
        bcrypt_rounds: bcrypt cost factor
        googleai_api_key: API key for the generative text gateway
        genai_model: litellm model identifier
        port: HTTP listening port
        cors_origins: Allowed CORS origins
        chat_rate_limit: slowapi limit string for POST /predict/chat
        data_dir: Directory holding the bundled JSON datasets
        log_level: Process-wide logging level
        log_dir: Directory for log files
        max_sessions_per_owner: Retention cap applied on every chat append
    """

    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "afrisight"
    jwt_secret: str
    jwt_ttl_hours: int = Field(168, ge=0)
    bcrypt_rounds: int = Field(10, ge=4, le=31)
    googleai_api_key: str
    genai_model: str = "gemini/gemini-2.5-flash"
    port: int = 5000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    chat_rate_limit: str = "10/minute"
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_dir: str = "logs"
    max_sessions_per_owner: int = Field(100, ge=1)

    @classmethod
    def from_env(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from YAML (optional) and environment variables.

        Args:
            config_path: YAML file path; defaults to ``$AFRISIGHT_CONFIG``
            environ: Mapping used instead of ``os.environ`` (tests)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a mandatory value is missing
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config_path = config_path or environ.get("AFRISIGHT_CONFIG")
        from_file = (
            ConfigLoader(config_path).select({name: keys[1] for name, keys in _SOURCES.items()})
            if config_path
            else {}
        )

        values = {}
        for field_name, (env_key, _) in _SOURCES.items():
            value = environ.get(env_key, from_file.get(field_name))
            if value in (None, ""):
                continue
            if field_name == "cors_origins" and isinstance(value, str):
                value = [origin.strip() for origin in value.split(",") if origin.strip()]
            values[field_name] = value

        for field_name in _REQUIRED:
            if not values.get(field_name):
                raise ConfigurationError.from_missing_key(_SOURCES[field_name][0])

        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
