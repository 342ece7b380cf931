"""
Authentication and authorization.

Design principles:
1. Identity is an explicit AuthContext value, never request state
2. Strict and optional resolution share one token parser
3. Ownership is a single comparison, applied after authentication
4. Private videos are visible only to their owner
"""

from vidshare.auth.context import (
    AuthContext,
    resolve_optional,
    resolve_strict,
)
from vidshare.auth.passwords import CredentialHasher
from vidshare.auth.policies import (
    check,
    is_owner,
    optional_auth,
    owned_by,
    require_auth,
    require_authenticated,
    require_owner,
)
from vidshare.auth.tokens import TokenClaims, TokenConfig, TokenService
from vidshare.auth.validators import (
    CredentialValidator,
    password_problems,
    validate_new_password,
)
from vidshare.auth.visibility import ensure_visible, filter_visible, is_visible

__all__ = [
    # Context
    "AuthContext",
    "resolve_optional",
    "resolve_strict",
    # Passwords
    "CredentialHasher",
    "CredentialValidator",
    "password_problems",
    "validate_new_password",
    # Tokens
    "TokenClaims",
    "TokenConfig",
    "TokenService",
    # Policies
    "check",
    "is_owner",
    "optional_auth",
    "owned_by",
    "require_auth",
    "require_authenticated",
    "require_owner",
    # Visibility
    "ensure_visible",
    "filter_visible",
    "is_visible",
]
