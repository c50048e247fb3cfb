import io
from contextlib import contextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker

import streamshelf.models  # noqa: F401
from streamshelf.api.deps import get_status_enqueuer, get_stream_client
from streamshelf.core.errors import UpstreamFailure
from streamshelf.db.base import Base
from streamshelf.db.session import build_engine, get_db
from streamshelf.main import app
from streamshelf.services.catalog import CatalogService
from streamshelf.services.sections import SectionService
from streamshelf.services.stream import StreamStatus, StreamUpload


OWNER_ID = "admin-user"
OTHER_OWNER_ID = "someone-else"


class FakeStreamClient:
    """In-memory stand-in for the stream provider."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.statuses = {}
        self.fail_upload = False
        self.fail_delete = False
        self._counter = 0

    def upload(self, fileobj, filename, title=None):
        if self.fail_upload:
            raise UpstreamFailure("upload rejected")
        self._counter += 1
        uid = f"uid-{self._counter:04d}"
        self.uploads.append({"uid": uid, "filename": filename, "title": title, "body": fileobj.read()})
        return StreamUpload(external_id=uid, duration_sec=12.5)

    def delete(self, external_id):
        if self.fail_delete:
            raise UpstreamFailure("delete rejected")
        self.deleted.append(external_id)

    def get_status(self, external_id):
        return self.statuses.get(external_id, StreamStatus(state="inprogress"))


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'streamshelf_test.db'}")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def stream():
    return FakeStreamClient()


@pytest.fixture
def enqueued():
    return []


@pytest.fixture
def catalog(db, stream, enqueued):
    return CatalogService(db, stream=stream, enqueue_sync=enqueued.append)


@pytest.fixture
def sections(db, catalog):
    return SectionService(db, catalog)


@pytest.fixture
def make_video(catalog):
    def _make(title="Clip", owner_id=OWNER_ID):
        return catalog.add_video(owner_id, io.BytesIO(b"binary"), f"{title}.mp4", title=title)
    return _make


@pytest.fixture
def db_session_override(session_factory):
    """Replacement for get_db_session bound to the test database."""
    @contextmanager
    def _session():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
    return _session


@pytest_asyncio.fixture
async def api_client(session_factory, stream, enqueued):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_stream_client] = lambda: stream
    app.dependency_overrides[get_status_enqueuer] = lambda: enqueued.append
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
