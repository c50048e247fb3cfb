"""
Scheduler - polls the provider for videos still in processing.
Each tick enqueues one status sync job per processing video.
"""
import logging
import time

from sqlalchemy.orm import Session

from streamshelf.core.enums import VideoStatus
from streamshelf.core.logging import setup_logging
from streamshelf.core.settings import settings
from streamshelf.core.worker_settings import worker_settings
from streamshelf.db.session import SessionLocal, engine
from streamshelf.db.base import Base
from streamshelf.db.repositories import VideoRepository

logger = logging.getLogger(__name__)


def init_db():
    """Create tables if they don't exist"""
    logger.info("Initializing database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready.")


def processing_video_ids(db: Session, limit: int) -> list[str]:
    return [v.id for v in VideoRepository(db).get_by_status(VideoStatus.PROCESSING.value, limit=limit)]


def tick(enqueue=None, session_factory=SessionLocal) -> int:
    """
    Enqueue a status sync for every video still processing.
    Returns the number of jobs enqueued.
    """
    if enqueue is None:
        from streamshelf.workers.jobs import enqueue_status_sync
        enqueue = enqueue_status_sync

    db: Session = session_factory()
    try:
        video_ids = processing_video_ids(db, worker_settings.poll_batch_size)
    finally:
        db.close()

    enqueued = 0
    for video_id in video_ids:
        try:
            enqueue(video_id)
            enqueued += 1
        except Exception as e:
            logger.error(f"[scheduler] Could not enqueue sync for {video_id}: {e}")

    if enqueued:
        logger.info(f"[scheduler] Enqueued {enqueued} status sync jobs")
    return enqueued


if __name__ == "__main__":
    setup_logging(level=settings.log_level, structured=settings.log_structured)

    # Wait for DB to be ready
    for attempt in range(10):
        try:
            init_db()
            break
        except Exception as e:
            logger.warning(f"DB not ready (attempt {attempt + 1}/10): {e}")
            time.sleep(3)

    logger.info(f"Scheduler started. Polling every {worker_settings.poll_interval_seconds}s")
    while True:
        tick()
        time.sleep(worker_settings.poll_interval_seconds)
