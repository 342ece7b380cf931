"""
Service lookups for route handlers.

Services are built once in the app lifespan and stored on app.state.
"""

from __future__ import annotations

from fastapi import Request

from vidshare.services import AccountService, VideoService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.accounts


def get_video_service(request: Request) -> VideoService:
    return request.app.state.videos
