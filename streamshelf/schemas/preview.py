from pydantic import BaseModel, Field

from streamshelf.schemas.video import VideoOut
from streamshelf.schemas.section import SectionOut

class DashboardOut(BaseModel):
    total_videos: int
    total_sections: int
    recent_videos: list[VideoOut]
    recent_sections: list[SectionOut]

class PreviewItem(BaseModel):
    id: str
    order: int
    is_featured: bool
    video_id: str
    title: str
    stream_url: str
    thumbnail_url: str

class PreviewSection(BaseModel):
    id: str
    title: str
    slug: str
    description: str | None = None
    items: list[PreviewItem] = Field(default_factory=list)

class PreviewOut(BaseModel):
    hero: PreviewItem | None = None
    sections: list[PreviewSection]
