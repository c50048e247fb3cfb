from fastapi import APIRouter
from streamshelf.api.routes.health import router as health
from streamshelf.api.routes.videos import router as videos
from streamshelf.api.routes.sections import router as sections
from streamshelf.api.routes.dashboard import router as dashboard

router = APIRouter()
router.include_router(health)
router.include_router(videos)
router.include_router(sections)
router.include_router(dashboard)
