# =============================================================================
# Identity Tokens
# =============================================================================
#
# Signed, self-contained JWTs carrying {userId, username}. Nothing is
# stored server side: a token is valid if its signature matches and its
# two hour window has not passed.
#
# The signing secret is read once from Settings into a frozen TokenConfig
# and handed to TokenService; nothing here reads the environment.
#
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from pydantic import BaseModel

from vidshare.config import Settings
from vidshare.core.errors import ConfigurationError, ExpiredToken, InvalidToken
from vidshare.core.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=2)


# =============================================================================
# Models
# =============================================================================


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration, fixed at startup."""

    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = DEFAULT_TTL

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenConfig:
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(minutes=settings.jwt_expire_minutes),
        )

    def ensure_configured(self) -> None:
        if not self.secret_key:
            raise ConfigurationError("JWT secret is not configured")


class TokenClaims(BaseModel):
    """Verified token payload."""

    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime


# =============================================================================
# Service
# =============================================================================


class TokenService:
    """Issues and verifies identity tokens."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = utc_now):
        self.config = config
        self._clock = clock

    def issue(self, user_id: str, username: str) -> str:
        """Create a token valid for exactly `config.ttl` from now."""
        self.config.ensure_configured()

        now = self._clock()
        payload = {
            "userId": user_id,
            "username": username,
            "iat": now,
            "exp": now + self.config.ttl,
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            InvalidToken: bad signature, garbage, or missing/ill-typed claims
            ExpiredToken: now is past the token's expiry
            ConfigurationError: no signing secret
        """
        self.config.ensure_configured()

        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                # expiry is checked below against our own clock
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": ["exp", "iat", "userId", "username"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}")

        try:
            claims = TokenClaims(
                user_id=payload["userId"],
                username=payload["username"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (TypeError, ValueError, OverflowError, OSError):
            raise InvalidToken("Invalid token: malformed claims")

        if self._clock() > claims.expires_at:
            raise ExpiredToken()

        return claims
