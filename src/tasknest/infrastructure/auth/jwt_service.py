"""JWT token service.

Issues and validates the bearer tokens returned after email verification
and login.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from tasknest.core.config import get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating JWT access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "tasknest"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_access_token(
        self,
        user_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The account's unique identifier.
            email: The account's email address.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": user_id,
            "iat": now,
            "exp": now + expires_delta,
            "user_id": user_id,
            "email": email,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate that a token is an access token and decode it.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not an access token.
        """
        payload = self.decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        return payload

    def get_expires_in(self, expires_delta: timedelta | None = None) -> int:
        """Get the access token lifetime in seconds."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
        return int(expires_delta.total_seconds())


# Default JWT service instance
jwt_service = JWTService()
