"""
In-memory storage implementations.

These work without any external services. Writes take an asyncio.Lock
so unique checks and counter updates behave atomically the way a
database would.
"""

from __future__ import annotations

import asyncio
from typing import Any

from vidshare.core.errors import DuplicateField
from vidshare.core.models import Account, Video
from vidshare.storage.base import AccountStorage, StorageProvider, VideoStorage


# =============================================================================
# Accounts
# =============================================================================


class InMemoryAccountStorage(AccountStorage):
    """Dict-backed account table with unique username and email."""

    def __init__(self):
        self._data: dict[str, Account] = {}
        self._lock = asyncio.Lock()

    def _clashes(self, account: Account) -> list[str]:
        fields = []
        others = [a for a in self._data.values() if a.id != account.id]
        if any(a.username == account.username for a in others):
            fields.append("username")
        if any(a.email.lower() == account.email.lower() for a in others):
            fields.append("email")
        return fields

    async def create(self, account: Account) -> Account:
        async with self._lock:
            clashes = self._clashes(account)
            if clashes:
                raise DuplicateField(clashes)
            self._data[account.id] = account.model_copy()
            return account.model_copy()

    async def get(self, id: str) -> Account | None:
        account = self._data.get(id)
        return account.model_copy() if account else None

    async def get_by_email(self, email: str) -> Account | None:
        email = email.lower()
        for account in self._data.values():
            if account.email.lower() == email:
                return account.model_copy()
        return None

    async def get_by_username(self, username: str) -> Account | None:
        for account in self._data.values():
            if account.username == username:
                return account.model_copy()
        return None

    async def list(self) -> list[Account]:
        return [a.model_copy() for a in self._data.values()]

    async def update(self, id: str, updates: dict[str, Any]) -> Account | None:
        async with self._lock:
            current = self._data.get(id)
            if current is None:
                return None
            updated = current.model_copy(update=updates)
            clashes = self._clashes(updated)
            if clashes:
                raise DuplicateField(clashes)
            self._data[id] = updated
            return updated.model_copy()

    async def delete(self, id: str) -> bool:
        async with self._lock:
            return self._data.pop(id, None) is not None


# =============================================================================
# Videos
# =============================================================================


class InMemoryVideoStorage(VideoStorage):
    """Dict-backed video table. Dicts keep insertion order."""

    def __init__(self):
        self._data: dict[str, Video] = {}
        self._lock = asyncio.Lock()

    async def create(self, video: Video) -> Video:
        async with self._lock:
            self._data[video.id] = video.model_copy()
            return video.model_copy()

    async def get(self, id: str) -> Video | None:
        video = self._data.get(id)
        return video.model_copy() if video else None

    async def list(self) -> list[Video]:
        return [v.model_copy() for v in self._data.values()]

    async def list_visible(self, viewer_id: str | None = None) -> list[Video]:
        return [
            v.model_copy()
            for v in self._data.values()
            if not v.is_private or (viewer_id is not None and v.owner_id == viewer_id)
        ]

    async def list_by_owner(self, owner_id: str) -> list[Video]:
        return [v.model_copy() for v in self._data.values() if v.owner_id == owner_id]

    async def update(self, id: str, updates: dict[str, Any]) -> Video | None:
        async with self._lock:
            current = self._data.get(id)
            if current is None:
                return None
            updated = current.model_copy(update=updates)
            self._data[id] = updated
            return updated.model_copy()

    async def delete(self, id: str) -> bool:
        async with self._lock:
            return self._data.pop(id, None) is not None

    async def delete_by_owner(self, owner_id: str) -> int:
        async with self._lock:
            doomed = [vid for vid, v in self._data.items() if v.owner_id == owner_id]
            for vid in doomed:
                del self._data[vid]
            return len(doomed)

    async def _add_likes(self, id: str, delta: int) -> Video | None:
        async with self._lock:
            current = self._data.get(id)
            if current is None:
                return None
            updated = current.model_copy(update={"likes": max(0, current.likes + delta)})
            self._data[id] = updated
            return updated.model_copy()

    async def increment_likes(self, id: str) -> Video | None:
        return await self._add_likes(id, 1)

    async def decrement_likes(self, id: str) -> Video | None:
        return await self._add_likes(id, -1)


# =============================================================================
# Factory
# =============================================================================


def create_local_storage() -> StorageProvider:
    """Create a StorageProvider with in-memory implementations."""
    return StorageProvider(
        accounts=InMemoryAccountStorage(),
        videos=InMemoryVideoStorage(),
    )
