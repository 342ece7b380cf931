"""
Storage abstraction layer.

All persistence goes through these interfaces. The storage layer is the
single source of truth: it enforces the username/email unique
constraints and applies like counter changes atomically. Lookups of a
missing id return None (or False for deletes) rather than raising, so
services decide what "missing" means.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from vidshare.core.models import Account, Video


# =============================================================================
# Storage Interfaces
# =============================================================================


class AccountStorage(ABC):
    """Storage for accounts."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Insert an account. Raises DuplicateField on a unique clash."""
        pass

    @abstractmethod
    async def get(self, id: str) -> Account | None:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None:
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Account | None:
        pass

    @abstractmethod
    async def list(self) -> list[Account]:
        pass

    @abstractmethod
    async def update(self, id: str, updates: dict[str, Any]) -> Account | None:
        """Partial update. Returns the new record, or None if missing."""
        pass

    @abstractmethod
    async def delete(self, id: str) -> bool:
        pass


class VideoStorage(ABC):
    """Storage for video metadata."""

    @abstractmethod
    async def create(self, video: Video) -> Video:
        pass

    @abstractmethod
    async def get(self, id: str) -> Video | None:
        pass

    @abstractmethod
    async def list(self) -> list[Video]:
        """All videos in insertion order."""
        pass

    @abstractmethod
    async def list_visible(self, viewer_id: str | None = None) -> list[Video]:
        """Public videos OR videos owned by viewer_id, in insertion order."""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[Video]:
        pass

    @abstractmethod
    async def update(self, id: str, updates: dict[str, Any]) -> Video | None:
        pass

    @abstractmethod
    async def delete(self, id: str) -> bool:
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_id: str) -> int:
        """Delete every video of an owner; returns how many went."""
        pass

    @abstractmethod
    async def increment_likes(self, id: str) -> Video | None:
        pass

    @abstractmethod
    async def decrement_likes(self, id: str) -> Video | None:
        """Atomic decrement that stops at zero."""
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for all storage backends.

    Initialize once at app startup with appropriate implementations.
    """

    model_config = {"arbitrary_types_allowed": True}

    accounts: AccountStorage
    videos: VideoStorage
