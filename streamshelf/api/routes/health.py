from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from streamshelf.core.settings import settings
from streamshelf.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    status = {
        "status": "healthy",
        "database": "unknown",
        "stream_provider": "configured" if settings.stream_api_token and settings.stream_account_id else "missing",
    }
    try:
        db.execute(text("SELECT 1"))
        status["database"] = "up"
    except Exception as e:
        status["database"] = f"down: {e}"
        status["status"] = "degraded"
    return status
