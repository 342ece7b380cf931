"""
Core data models.

Account and Video are the two persisted records. Account carries the
password hash; it is never returned from the API, which only ever
sees AccountView.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from vidshare.core.utils import generate_id, utc_now


# =============================================================================
# Accounts
# =============================================================================


class Account(BaseModel):
    """Account as stored."""

    id: str = Field(default_factory=generate_id)
    username: str = Field(min_length=1)
    email: str
    password_hash: str = Field(repr=False)
    registered_at: datetime = Field(default_factory=utc_now)

    def redacted(self) -> AccountView:
        return AccountView(
            id=self.id,
            username=self.username,
            email=self.email,
            registered_at=self.registered_at,
        )


class AccountView(BaseModel):
    """Account data returned to clients (no credential hash)."""

    id: str
    username: str
    email: str
    registered_at: datetime


class SignupRequest(BaseModel):
    username: str = Field(min_length=1)
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    """Identifier may be a username or an email."""

    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1)


class PasswordChangeRequest(BaseModel):
    password: str


class AuthResult(BaseModel):
    """Redacted account plus a freshly issued token."""

    account: AccountView
    token: str
    token_type: str = "bearer"


# =============================================================================
# Videos
# =============================================================================


class Video(BaseModel):
    """Video metadata. Likes never drop below zero."""

    id: str = Field(default_factory=generate_id)
    owner_id: str
    title: str = Field(min_length=1)
    description: str = ""
    credits: str | None = None
    is_private: bool = False
    likes: int = Field(default=0, ge=0)
    uploaded_at: datetime = Field(default_factory=utc_now)


class VideoCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    description: str = ""
    credits: str | None = None
    is_private: bool = False


class VideoUpdate(BaseModel):
    """Owner-editable fields. Anything left unset is not touched."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    credits: str | None = None
    is_private: bool | None = None


class SortField(str, Enum):
    LIKES = "likes"
    TITLE = "title"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
