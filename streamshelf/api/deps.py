from typing import Callable

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from streamshelf.core.settings import settings
from streamshelf.db.session import get_db
from streamshelf.services.catalog import CatalogService
from streamshelf.services.sections import SectionService
from streamshelf.services.stream import StreamClient


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    """Fixed admin owner, or the X-Owner-Id header in multi-tenant mode."""
    if not settings.multi_tenant:
        return settings.admin_owner_id
    if not x_owner_id or not x_owner_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Owner-Id header")
    return x_owner_id.strip()


def get_stream_client() -> StreamClient:
    return StreamClient()


def get_status_enqueuer() -> Callable[[str], None]:
    from streamshelf.workers.jobs import enqueue_status_sync
    return enqueue_status_sync


def get_catalog(
    db: Session = Depends(get_db),
    stream: StreamClient = Depends(get_stream_client),
    enqueue: Callable[[str], None] = Depends(get_status_enqueuer),
) -> CatalogService:
    return CatalogService(db, stream=stream, enqueue_sync=enqueue)


def get_section_service(
    db: Session = Depends(get_db),
    catalog: CatalogService = Depends(get_catalog),
) -> SectionService:
    return SectionService(db, catalog)
