"""
Logging Configuration - Structured logging with owner context
"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional
from contextvars import ContextVar

# Context variables for request tracking
current_owner_id: ContextVar[Optional[str]] = ContextVar('current_owner_id', default=None)
current_video_id: ContextVar[Optional[str]] = ContextVar('current_video_id', default=None)


class StructuredFormatter(logging.Formatter):
    """
    JSON-structured log formatter with owner context.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        owner_id = current_owner_id.get()
        video_id = current_video_id.get()

        if owner_id:
            log_data["owner_id"] = owner_id
        if video_id:
            log_data["video_id"] = video_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class ContextFormatter(logging.Formatter):
    """Human-readable formatter that appends owner/video context when set."""
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        tags = []
        if current_owner_id.get():
            tags.append(f"owner={current_owner_id.get()}")
        if current_video_id.get():
            tags.append(f"video={current_video_id.get()}")
        return f"{line} [{' '.join(tags)}]" if tags else line


def setup_logging(level: str = "INFO", structured: bool = True):
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        structured: Use JSON format (True) or human-readable (False)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(ContextFormatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        ))

    root_logger.addHandler(handler)


class OwnerContext:
    """
    Context manager for tagging logs with the acting owner.

    Usage:
        with OwnerContext(owner_id="admin-user", video_id="xyz"):
            logger.info("Deleting...")  # Will include owner_id and video_id
    """
    def __init__(self, owner_id: Optional[str] = None, video_id: Optional[str] = None):
        self.owner_id = owner_id
        self.video_id = video_id
        self._tokens = []

    def __enter__(self):
        if self.owner_id:
            self._tokens.append((current_owner_id, current_owner_id.set(self.owner_id)))
        if self.video_id:
            self._tokens.append((current_video_id, current_video_id.set(self.video_id)))
        return self

    def __exit__(self, *args):
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)
