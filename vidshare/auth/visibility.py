"""
Visibility rules for videos.

A public video is visible to everyone. A private video is visible only
to its owner. Visibility is a pure function of
(is_private, owner_id, viewer_id).
"""

from __future__ import annotations

from typing import Iterable

from vidshare.core.errors import Forbidden, NotFound
from vidshare.core.models import SortField, SortOrder, Video


def is_visible(video: Video, viewer_id: str | None = None) -> bool:
    if not video.is_private:
        return True
    return viewer_id is not None and viewer_id == video.owner_id


def sort_videos(
    videos: Iterable[Video],
    sort: SortField | None = None,
    order: SortOrder = SortOrder.ASC,
) -> list[Video]:
    """Order by likes or title. No sort key keeps the incoming order."""
    videos = list(videos)
    if sort is None:
        return videos
    return sorted(
        videos,
        key=lambda v: getattr(v, sort.value),
        reverse=order == SortOrder.DESC,
    )


def filter_visible(
    videos: Iterable[Video],
    viewer_id: str | None = None,
    sort: SortField | None = None,
    order: SortOrder = SortOrder.ASC,
) -> list[Video]:
    """All public videos plus the viewer's own private ones."""
    return sort_videos((v for v in videos if is_visible(v, viewer_id)), sort, order)


def ensure_visible(video: Video | None, viewer_id: str | None = None) -> Video:
    """
    Gate a single fetch.

    Raises:
        NotFound: no such video
        Forbidden: it exists, but this viewer may not see it
    """
    if video is None:
        raise NotFound("Video could not be found")
    if not is_visible(video, viewer_id):
        raise Forbidden("This video is private")
    return video
