from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from streamshelf.api.deps import get_owner_id
from streamshelf.db.session import get_db
from streamshelf.schemas.preview import DashboardOut, PreviewOut
from streamshelf.services.preview import dashboard_stats, frontend_preview

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardOut)
def get_dashboard(owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    return dashboard_stats(db, owner_id)


@router.get("/preview", response_model=PreviewOut)
def get_preview(owner_id: str = Depends(get_owner_id), db: Session = Depends(get_db)):
    """Sections as the viewer-facing front end would render them."""
    return frontend_preview(db, owner_id)
