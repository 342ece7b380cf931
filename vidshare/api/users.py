"""
User routes.

Reads are public. Changing a password or deleting an account is only
allowed on your own account.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from vidshare.api.dependencies import get_account_service, get_video_service
from vidshare.auth.context import AuthContext
from vidshare.auth.policies import optional_auth, require_auth
from vidshare.core.models import AccountView, PasswordChangeRequest, SortField, SortOrder, Video
from vidshare.services import AccountService, VideoService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[AccountView])
async def list_users(accounts: AccountService = Depends(get_account_service)):
    return await accounts.list_accounts()


@router.get("/{user_id}", response_model=AccountView)
async def get_user(user_id: str, accounts: AccountService = Depends(get_account_service)):
    return await accounts.get_account(user_id)


@router.get("/{user_id}/videos", response_model=list[Video])
async def list_user_videos(
    user_id: str,
    sort: SortField | None = None,
    order: SortOrder = SortOrder.ASC,
    ctx: AuthContext = Depends(optional_auth),
    videos: VideoService = Depends(get_video_service),
):
    """A user's videos; private ones only when the user asks."""
    return await videos.list_account_videos(ctx, user_id, sort, order)


@router.put("/{user_id}", response_model=AccountView)
async def change_password(
    user_id: str,
    data: PasswordChangeRequest,
    ctx: AuthContext = Depends(require_auth),
    accounts: AccountService = Depends(get_account_service),
):
    return await accounts.change_password(ctx, user_id, data.password)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    ctx: AuthContext = Depends(require_auth),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.delete_account(ctx, user_id)
    return Response(status_code=204)
