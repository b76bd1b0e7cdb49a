"""
Token issuer for JWT access tokens.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from ibge_api.config.settings import Settings
from ibge_api.database.models.user import User
from ibge_api.services.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a verified access token."""

    subject: str
    issued_at: datetime
    expires_at: datetime
    name: Optional[str] = None


class TokenService:
    """Issues and verifies stateless HS256 bearer tokens."""

    def __init__(self, settings: Settings, now: Callable[[], datetime] = _utcnow):
        """
        Initialize token service.

        Args:
            settings: Application settings holding the signing key
            now: Clock returning an aware UTC datetime
        """
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.expire = timedelta(minutes=settings.jwt_expire_minutes)
        self.now = now

    def create_token(self, user: User) -> str:
        """
        Create a JWT token for a user.

        Args:
            user: Authenticated user

        Returns:
            JWT token string
        """
        issued_at = self.now()

        payload = {
            "sub": user.email,
            "iat": issued_at,
            "exp": issued_at + self.expire,
        }
        if user.name:
            payload["name"] = user.name

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """
        Verify a JWT token signature and expiry.

        Args:
            token: JWT token string

        Returns:
            TokenClaims for the token

        Raises:
            UnauthenticatedError: If token is invalid or expired (status 401)
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise UnauthenticatedError("Invalid or expired token", status_code=401)

        subject = payload.get("sub")
        if not subject or "iat" not in payload or "exp" not in payload:
            raise UnauthenticatedError("Invalid token: missing claims", status_code=401)

        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            name=payload.get("name"),
        )
