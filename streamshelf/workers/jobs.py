"""
Background jobs - provider status sync for uploaded videos.
"""
from __future__ import annotations

import logging

from streamshelf.db.context import get_db_session
from streamshelf.services.catalog import CatalogService

logger = logging.getLogger(__name__)


def sync_video_status_job(video_id: str) -> str | None:
    """
    Ask the provider whether a processing video is ready.

    Returns the resulting status, or None when the video is gone.
    Provider errors propagate so rq can retry the job.
    """
    with get_db_session() as db:
        video = CatalogService(db).sync_status(video_id)
        if video is None:
            return None
        logger.info(f"[jobs] sync_video_status {video_id}: {video.status}")
        return video.status


def enqueue_status_sync(video_id: str) -> None:
    """Hand a freshly uploaded video to the sync queue."""
    from streamshelf.workers.queue import enqueue_sync

    enqueue_sync(sync_video_status_job, video_id)
