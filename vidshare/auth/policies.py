"""
Policies - ownership checks and the FastAPI auth dependencies.

Guards are plain functions `AuthContext -> AuthContext` that either
return the context or raise. Callers chain them explicitly with
`check()`, so ordering is visible where it matters:

    check(ctx, require_authenticated, owned_by(video.owner_id))

Authentication always comes before ownership, which keeps
Unauthenticated (401) and Forbidden (403) apart.
"""

from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vidshare.auth.context import AuthContext, resolve_optional, resolve_strict
from vidshare.auth.tokens import TokenService
from vidshare.core.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

Guard = Callable[[AuthContext], AuthContext]


# =============================================================================
# Ownership Guard
# =============================================================================


def is_owner(actor_id: str | None, owner_id: str) -> bool:
    """Allow iff there is an actor and it is exactly the owner."""
    return actor_id is not None and actor_id == owner_id


def require_authenticated(ctx: AuthContext) -> AuthContext:
    if ctx.is_anonymous:
        raise Unauthenticated()
    return ctx


def owned_by(owner_id: str, message: str | None = None) -> Guard:
    """Guard allowing only the owner of a resource."""

    def guard(ctx: AuthContext) -> AuthContext:
        if not is_owner(ctx.user_id, owner_id):
            logger.info("Denied %s access to resource owned by %s", ctx.user_id, owner_id)
            raise Forbidden(message)
        return ctx

    return guard


def check(ctx: AuthContext, *guards: Guard) -> AuthContext:
    """Run guards in order; the first one to raise stops the chain."""
    for guard in guards:
        ctx = guard(ctx)
    return ctx


def require_owner(ctx: AuthContext, owner_id: str, message: str | None = None) -> AuthContext:
    """Authenticated and owner, in that order."""
    return check(ctx, require_authenticated, owned_by(owner_id, message))


# =============================================================================
# FastAPI Dependencies
# =============================================================================


# Doesn't fail on its own if no token; the resolvers decide
optional_bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def _raw_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """
    Strict identity for routes that need a logged-in user.

    Usage:
        @router.post("/videos")
        async def create(ctx: AuthContext = Depends(require_auth)):
            ...
    """
    return resolve_strict(_raw_token(credentials), tokens)


async def optional_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    """Best-effort identity; anonymous when missing or unusable."""
    return resolve_optional(_raw_token(credentials), tokens)
