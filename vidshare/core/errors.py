"""
Error taxonomy.

Every failure the core can report is one of these classes. Each carries
the HTTP status the API layer should use and an optional list of detail
entries, so validation problems can all be reported in one response.
"""

from __future__ import annotations

from typing import Any


class VidshareError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.errors:
            body["details"] = self.errors
        return body


# =============================================================================
# Client data errors (400)
# =============================================================================


class ValidationError(VidshareError):
    """Malformed or missing input; the client must fix the request."""

    status_code = 400
    default_message = "Invalid request"


class WeakPassword(ValidationError):
    """Password fails one or more strength rules."""

    default_message = "Password does not meet requirements"


class DuplicateField(ValidationError):
    """Username and/or email already belong to another account."""

    default_message = "Signup failed, please try different credentials"

    def __init__(
        self,
        fields: list[str],
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.fields = list(fields)
        if errors is None:
            errors = [{"field": f, "msg": f"{f.capitalize()} already in use"} for f in self.fields]
        super().__init__(message, errors)


# =============================================================================
# Identity errors
# =============================================================================


class Unauthenticated(VidshareError):
    """Missing, invalid or expired proof of identity."""

    status_code = 401
    default_message = "Access denied. No token provided."


class InvalidCredentials(Unauthenticated):
    """Login failed. Never says which part was wrong."""

    default_message = "Invalid credentials"


class TokenError(Unauthenticated):
    """Base for token verification failures."""

    default_message = "Invalid or expired token"


class ExpiredToken(TokenError):
    """Token signature is fine but its validity window has passed."""

    default_message = "Token expired"


class InvalidToken(TokenError):
    """Token is malformed or its signature does not match.

    Reported as a client data error rather than 401.
    """

    status_code = 400
    default_message = "Invalid token"


# =============================================================================
# Authorization / lookup
# =============================================================================


class Forbidden(VidshareError):
    """Valid identity, but no rights over this resource."""

    status_code = 403
    default_message = "You are not allowed to access this resource"


class NotFound(VidshareError):
    status_code = 404
    default_message = "Resource could not be found"


# =============================================================================
# Server errors (500)
# =============================================================================


class ConfigurationError(VidshareError):
    """Required process-wide configuration is missing. Never retried."""

    status_code = 500
    default_message = "Server is not configured"


class InternalError(VidshareError):
    """Unexpected collaborator or hashing failure."""

    status_code = 500
