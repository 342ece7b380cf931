"""
Core module - data models, error taxonomy, shared utilities.
"""

from vidshare.core.models import (
    Account,
    AccountView,
    AuthResult,
    LoginRequest,
    PasswordChangeRequest,
    SignupRequest,
    SortField,
    SortOrder,
    Video,
    VideoCreate,
    VideoUpdate,
)
from vidshare.core.errors import (
    ConfigurationError,
    DuplicateField,
    ExpiredToken,
    Forbidden,
    InternalError,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    TokenError,
    Unauthenticated,
    ValidationError,
    VidshareError,
    WeakPassword,
)
from vidshare.core.utils import generate_id, utc_now

__all__ = [
    # Models
    "Account",
    "AccountView",
    "AuthResult",
    "LoginRequest",
    "PasswordChangeRequest",
    "SignupRequest",
    "SortField",
    "SortOrder",
    "Video",
    "VideoCreate",
    "VideoUpdate",
    # Errors
    "ConfigurationError",
    "DuplicateField",
    "ExpiredToken",
    "Forbidden",
    "InternalError",
    "InvalidCredentials",
    "InvalidToken",
    "NotFound",
    "TokenError",
    "Unauthenticated",
    "ValidationError",
    "VidshareError",
    "WeakPassword",
    # Utils
    "generate_id",
    "utc_now",
]
