import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from streamshelf.core.settings import settings
from streamshelf.core.errors import InternalError, ServiceError
from streamshelf.core.logging import setup_logging
from streamshelf.api.router import router
from streamshelf.db.context import get_db_session
from streamshelf.db.session import engine
from streamshelf.db.base import Base
import streamshelf.models  # noqa: F401

setup_logging(level=settings.log_level, structured=settings.log_structured)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema verified.")
    if settings.seed_default_sections and not settings.multi_tenant:
        from streamshelf.services.sections import SectionService
        with get_db_session() as db:
            SectionService(db).seed_default_sections(settings.admin_owner_id)
    yield


app = FastAPI(title="StreamShelf Admin Backend", version="0.1.0", lifespan=lifespan)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} -> database error", exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(router)
