"""
Video Service.

Reads go through the visibility rules; writes go through the ownership
guard. Like/unlike are open to any caller.
"""

from __future__ import annotations

import logging

from vidshare.auth.context import AuthContext
from vidshare.auth.policies import check, owned_by, require_authenticated
from vidshare.auth.visibility import ensure_visible, filter_visible
from vidshare.core.errors import NotFound, Unauthenticated
from vidshare.core.models import SortField, SortOrder, Video, VideoCreate, VideoUpdate
from vidshare.storage.base import StorageProvider

logger = logging.getLogger(__name__)

NOT_YOURS = "You are not allowed to modify this video."

# Fields that may not be set to null by an update
_NON_NULLABLE = ("title", "description", "is_private")


class VideoService:
    """Video metadata, visibility and likes."""

    def __init__(self, storage: StorageProvider):
        self.storage = storage

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_videos(
        self,
        ctx: AuthContext,
        sort: SortField | None = None,
        order: SortOrder = SortOrder.ASC,
    ) -> list[Video]:
        """Public videos, plus the caller's own private ones."""
        videos = await self.storage.videos.list_visible(ctx.user_id)
        return filter_visible(videos, ctx.user_id, sort, order)

    async def get_video(self, ctx: AuthContext, video_id: str) -> Video:
        """
        Raises:
            NotFound: no such video
            Forbidden: private and not the caller's
        """
        return ensure_visible(await self.storage.videos.get(video_id), ctx.user_id)

    async def list_account_videos(
        self,
        ctx: AuthContext,
        account_id: str,
        sort: SortField | None = None,
        order: SortOrder = SortOrder.ASC,
    ) -> list[Video]:
        if await self.storage.accounts.get(account_id) is None:
            raise NotFound("User could not be found")
        videos = await self.storage.videos.list_by_owner(account_id)
        return filter_visible(videos, ctx.user_id, sort, order)

    # =========================================================================
    # Owner mutations
    # =========================================================================

    async def create_video(self, ctx: AuthContext, data: VideoCreate) -> Video:
        require_authenticated(ctx)
        # token may outlive the account it was issued for
        if await self.storage.accounts.get(ctx.user_id) is None:
            raise Unauthenticated("Account no longer exists")

        video = await self.storage.videos.create(Video(owner_id=ctx.user_id, **data.model_dump()))

        # delete_account removes the account before its videos; if it ran
        # between the check above and the write, this video would be missed
        if await self.storage.accounts.get(ctx.user_id) is None:
            await self.storage.videos.delete(video.id)
            raise Unauthenticated("Account no longer exists")

        logger.info("Video %s created by %s", video.id, ctx.user_id)
        return video

    async def _owned_video(self, ctx: AuthContext, video_id: str) -> Video:
        """Authenticated, exists, owned - checked in that order."""
        require_authenticated(ctx)
        video = await self.storage.videos.get(video_id)
        if video is None:
            raise NotFound("Video not found.")
        check(ctx, owned_by(video.owner_id, NOT_YOURS))
        return video

    async def update_video(self, ctx: AuthContext, video_id: str, data: VideoUpdate) -> Video:
        video = await self._owned_video(ctx, video_id)

        updates = data.model_dump(exclude_unset=True)
        for field in _NON_NULLABLE:
            if field in updates and updates[field] is None:
                del updates[field]
        if not updates:
            return video

        updated = await self.storage.videos.update(video_id, updates)
        if updated is None:
            raise NotFound("Video not found.")
        return updated

    async def delete_video(self, ctx: AuthContext, video_id: str) -> None:
        await self._owned_video(ctx, video_id)
        # lost a race with another delete
        if not await self.storage.videos.delete(video_id):
            raise NotFound("Video not found.")
        logger.info("Video %s deleted by %s", video_id, ctx.user_id)

    # =========================================================================
    # Likes
    # =========================================================================

    async def like_video(self, video_id: str) -> Video:
        video = await self.storage.videos.increment_likes(video_id)
        if video is None:
            raise NotFound("Video not found")
        return video

    async def unlike_video(self, video_id: str) -> Video:
        """Decrement, never below zero."""
        video = await self.storage.videos.decrement_likes(video_id)
        if video is None:
            raise NotFound("Video not found")
        return video
