"""
Auth context - who is making this request.

This is the lightweight value passed from the route into every service
call. It is built once per request by one of the two resolvers below
and never mutated afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vidshare.auth.tokens import TokenService
from vidshare.core.errors import TokenError, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """
    Identity of the caller, or nobody.

    Usage in routes:
        async def my_route(ctx: AuthContext = Depends(optional_auth)):
            if ctx.is_authenticated:
                ...
    """

    user_id: str | None = None
    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Is there a logged-in user?"""
        return self.user_id is not None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @classmethod
    def anonymous(cls) -> AuthContext:
        """Create an anonymous context (no user)."""
        return cls()


# =============================================================================
# Context Resolution
# =============================================================================


def context_from_token(token: str, tokens: TokenService) -> AuthContext:
    """Verify a raw token. Token errors propagate unchanged."""
    claims = tokens.verify(token)
    return AuthContext(user_id=claims.user_id, username=claims.username)


def resolve_strict(token: str | None, tokens: TokenService) -> AuthContext:
    """
    Resolve identity, failing closed.

    Raises:
        Unauthenticated: no token at all
        InvalidToken / ExpiredToken: verification failed
    """
    if not token:
        raise Unauthenticated()
    try:
        return context_from_token(token, tokens)
    except TokenError as e:
        logger.info("Rejected token: %s", e.message)
        raise


def resolve_optional(token: str | None, tokens: TokenService) -> AuthContext:
    """
    Resolve identity best-effort.

    Missing or bad tokens give an anonymous context instead of an error,
    so public endpoints can still serve the request.
    """
    if not token:
        return AuthContext.anonymous()
    try:
        return context_from_token(token, tokens)
    except TokenError as e:
        logger.debug("Ignoring unusable token: %s", e.message)
        return AuthContext.anonymous()
