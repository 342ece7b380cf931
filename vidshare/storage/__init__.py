"""
Storage abstractions.

- AccountStorage: accounts with unique username and email
- VideoStorage: video metadata with atomic like counters
"""

from vidshare.storage.base import (
    AccountStorage,
    VideoStorage,
    StorageProvider,
)
from vidshare.storage.local import (
    InMemoryAccountStorage,
    InMemoryVideoStorage,
    create_local_storage,
)

__all__ = [
    "AccountStorage",
    "VideoStorage",
    "StorageProvider",
    "InMemoryAccountStorage",
    "InMemoryVideoStorage",
    "create_local_storage",
]
