"""
Catalog Service - Video records backed by the stream provider.

Every call is scoped to an owner. The provider is asked to delete a
video before the local row goes away, so a provider failure leaves the
catalog untouched.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from streamshelf.core.enums import StreamState, VideoStatus, video_status_for
from streamshelf.core.errors import Conflict, InternalError, NotFound, UpstreamFailure, ValidationError
from streamshelf.core.logging import OwnerContext
from streamshelf.db.repositories import SectionItemRepository, VideoRepository
from streamshelf.models import Video
from streamshelf.services.stream import StreamClient, thumbnail_url

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status")


class CatalogService:
    def __init__(
        self,
        db: Session,
        stream: Optional[StreamClient] = None,
        enqueue_sync: Optional[Callable[[str], None]] = None,
    ):
        self.db = db
        self.stream = stream
        self.enqueue_sync = enqueue_sync
        self.videos = VideoRepository(db)
        self.items = SectionItemRepository(db)

    def _provider(self) -> StreamClient:
        if self.stream is None:
            self.stream = StreamClient()
        return self.stream

    def get_video(self, video_id: str, owner_id: str) -> Video:
        video = self.videos.get_for_owner(video_id, owner_id)
        if not video:
            raise NotFound("video")
        return video

    def list_videos(self, owner_id: str, limit: Optional[int] = None) -> list[Video]:
        return self.videos.get_by_owner(owner_id, limit=limit)

    def add_video(
        self,
        owner_id: str,
        fileobj: BinaryIO,
        filename: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Video:
        """Upload to the provider and record the video as processing."""
        title = (title or "").strip() or (filename or "").strip()
        if not title:
            raise ValidationError("Title is required")

        with OwnerContext(owner_id=owner_id):
            upload = self._provider().upload(fileobj, filename, title)

            if self.videos.get_by_provider_id(upload.external_id):
                self._discard_upload(upload.external_id)
                raise Conflict("duplicate", "Video already registered for this provider id")

            video = self.videos.create(
                owner_id=owner_id,
                title=title,
                description=description or None,
                provider_video_id=upload.external_id,
                thumbnail_url=thumbnail_url(upload.external_id),
                duration_sec=upload.duration_sec,
                status=VideoStatus.PROCESSING.value,
            )
            self._commit("add_video")
            logger.info(f"[catalog] Added video {video.id} ({upload.external_id})")

        if self.enqueue_sync is not None:
            try:
                self.enqueue_sync(video.id)
            except Exception as e:
                # The scheduler picks up processing videos on its next tick
                logger.warning(f"[catalog] Could not enqueue status sync for {video.id}: {e}")

        return video

    def update_video(self, video_id: str, owner_id: str, **fields) -> Video:
        """
        Apply exactly the supplied fields. A None description clears it.

        Setting status back to processing by hand is allowed; the background
        sync is what never moves a video out of ready or error.
        """
        video = self.get_video(video_id, owner_id)

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Title must not be empty")
        if "status" in changes:
            allowed = {s.value for s in VideoStatus}
            if changes["status"] not in allowed:
                raise ValidationError(f"Status must be one of {sorted(allowed)}")

        for key, value in changes.items():
            setattr(video, key, value)

        self._commit("update_video")
        logger.info(f"[catalog] Updated video {video_id}: {sorted(changes)}")
        return video

    def remove_video(self, video_id: str, owner_id: str) -> int:
        """
        Delete a video and every section item referencing it.

        Returns the number of section items removed. Raises UpstreamFailure
        without touching the database if the provider delete fails.
        """
        with OwnerContext(owner_id=owner_id, video_id=video_id):
            video = self.get_video(video_id, owner_id)

            self._provider().delete(video.provider_video_id)

            removed_items = self.items.delete_by_video(video.id)
            self.db.delete(video)
            self._commit("remove_video")
            logger.info(f"[catalog] Removed video {video_id} and {removed_items} section items")
            return removed_items

    def sync_status(self, video_id: str) -> Optional[Video]:
        """Pull the provider state for a processing video and apply it."""
        video = self.videos.get_by_id(video_id)
        if not video:
            logger.warning(f"[catalog] sync_status: video {video_id} no longer exists")
            return None
        if video.status != VideoStatus.PROCESSING.value:
            return video

        with OwnerContext(owner_id=video.owner_id, video_id=video.id):
            status = self._provider().get_status(video.provider_video_id)
            new_status = video_status_for(status.state)

            if status.duration_sec is not None:
                video.duration_sec = status.duration_sec
            if new_status is VideoStatus.ERROR:
                video.error_message = status.error_reason or StreamState.ERROR.value
            video.status = new_status.value

            self._commit("sync_status")
            if new_status is not VideoStatus.PROCESSING:
                logger.info(f"[catalog] Video {video.id} -> {new_status.value}")
        return video

    def _discard_upload(self, external_id: str) -> None:
        try:
            self._provider().delete(external_id)
        except UpstreamFailure as e:
            logger.error(f"[catalog] Orphaned provider upload {external_id}: {e.message}")

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"[catalog] {action} integrity error: {e.orig}")
            raise Conflict("duplicate", "Video conflicts with an existing record") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"[catalog] {action} failed")
            raise InternalError() from e
