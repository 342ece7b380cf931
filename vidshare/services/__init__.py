"""
Services - the operations the API exposes.
"""

from vidshare.services.accounts import AccountService
from vidshare.services.videos import VideoService

__all__ = [
    "AccountService",
    "VideoService",
]
