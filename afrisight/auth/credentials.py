"""Password hashing and bearer token issuance.

Tokens are HS256 JWTs carrying ``userId``, ``email``, ``name``,
``creatorType``, ``iat`` and (unless the TTL is 0) ``exp``. The verified
claims are all the rest of the application knows about the caller.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel, ConfigDict, Field

from afrisight.errors import AuthenticationError
from afrisight.users.models import UserRecord
from afrisight.utils.logger import LoggerManager

JWT_ALGORITHM = "HS256"

logger = LoggerManager.get_logger("credentials")


class Identity(BaseModel):
    """Verified token claims."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId")
    email: str
    name: str
    creator_type: Optional[str] = Field(None, alias="creatorType")


class CredentialService:
    """bcrypt password hashing and JWT signing/verification.

    Attributes:
        ttl: Token lifetime, or None for tokens that never expire
    """

    def __init__(self, secret: str, ttl_hours: int = 168, bcrypt_rounds: int = 10):
        """
        Args:
            secret: HMAC signing secret
            ttl_hours: Token lifetime in hours; 0 disables expiry
            bcrypt_rounds: bcrypt cost factor
        """
        if not secret:
            raise ValueError("JWT signing secret is required")
        self._secret = secret
        self.ttl = timedelta(hours=ttl_hours) if ttl_hours else None
        self.bcrypt_rounds = bcrypt_rounds

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time check of ``password`` against a stored hash.

        A malformed stored hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def issue_token(self, user: UserRecord, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "userId": user.id,
            "email": user.email,
            "name": user.name,
            "creatorType": user.creator_type,
            "iat": int(now.timestamp()),
        }
        if self.ttl is not None:
            payload["exp"] = int((now + self.ttl).timestamp())
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> Identity:
        """Decode and validate a bearer token.

        Raises:
            AuthenticationError: If the token is malformed, tampered with,
                expired, or lacks the identity claims
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token expired", original_error=e) from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token", details=str(e), original_error=e) from e

        if not claims.get("userId") or "email" not in claims or "name" not in claims:
            raise AuthenticationError("Invalid token", details="Missing identity claims")
        return Identity.model_validate(claims)
