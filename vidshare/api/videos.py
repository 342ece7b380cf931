"""
Video routes.

Reads resolve identity optionally so owners also see their private
videos; writes need a token and ownership.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from vidshare.api.dependencies import get_video_service
from vidshare.auth.context import AuthContext
from vidshare.auth.policies import optional_auth, require_auth
from vidshare.core.models import SortField, SortOrder, Video, VideoCreate, VideoUpdate
from vidshare.services import VideoService

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=list[Video])
async def list_videos(
    sort: SortField | None = None,
    order: SortOrder = SortOrder.ASC,
    ctx: AuthContext = Depends(optional_auth),
    videos: VideoService = Depends(get_video_service),
):
    return await videos.list_videos(ctx, sort, order)


@router.get("/{video_id}", response_model=Video)
async def get_video(
    video_id: str,
    ctx: AuthContext = Depends(optional_auth),
    videos: VideoService = Depends(get_video_service),
):
    return await videos.get_video(ctx, video_id)


@router.post("", response_model=Video, status_code=201)
async def create_video(
    data: VideoCreate,
    ctx: AuthContext = Depends(require_auth),
    videos: VideoService = Depends(get_video_service),
):
    return await videos.create_video(ctx, data)


@router.put("/{video_id}", response_model=Video)
async def update_video(
    video_id: str,
    data: VideoUpdate,
    ctx: AuthContext = Depends(require_auth),
    videos: VideoService = Depends(get_video_service),
):
    return await videos.update_video(ctx, video_id, data)


@router.delete("/{video_id}", status_code=204)
async def delete_video(
    video_id: str,
    ctx: AuthContext = Depends(require_auth),
    videos: VideoService = Depends(get_video_service),
):
    await videos.delete_video(ctx, video_id)
    return Response(status_code=204)


# TODO: like/unlike carry no identity check, so one caller can like a
# video any number of times. Needs a per-user like table to fix.
@router.post("/{video_id}/like", response_model=Video)
async def like_video(video_id: str, videos: VideoService = Depends(get_video_service)):
    return await videos.like_video(video_id)


@router.post("/{video_id}/unlike", response_model=Video)
async def unlike_video(video_id: str, videos: VideoService = Depends(get_video_service)):
    return await videos.unlike_video(video_id)
