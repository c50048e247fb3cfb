from datetime import datetime
from pydantic import BaseModel, Field

from streamshelf.schemas.video import VideoSummary

class SectionItemOut(BaseModel):
    id: str
    section_id: str
    order: int
    is_featured: bool
    video: VideoSummary

    class Config:
        from_attributes = True

class SectionOut(BaseModel):
    id: str
    title: str
    slug: str
    description: str | None = None
    is_active: bool
    order: int
    created_at: datetime
    items: list[SectionItemOut] = Field(default_factory=list)

    class Config:
        from_attributes = True

class SectionCreate(BaseModel):
    title: str
    slug: str
    description: str | None = None

class SectionUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    is_active: bool | None = None

class SectionItemCreate(BaseModel):
    video_id: str
    is_featured: bool = False

class ReorderItemIn(BaseModel):
    id: str
    is_featured: bool = False

class ReorderItemsIn(BaseModel):
    items: list[ReorderItemIn]
