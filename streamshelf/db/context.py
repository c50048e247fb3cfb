from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from streamshelf.db.session import SessionLocal


@contextmanager
def get_db_session() -> Iterator[Session]:
    """Session for scripts and workers; rolls back on error."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
