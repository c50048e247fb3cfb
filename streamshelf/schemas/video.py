from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field

class VideoOut(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str | None = None
    provider_video_id: str
    thumbnail_url: str | None = None
    duration_sec: float | None = None
    status: str
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class VideoUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: Literal["processing", "ready", "error"] | None = None

class VideoSummary(BaseModel):
    """Video fields embedded in section listings."""
    id: str
    title: str
    provider_video_id: str
    thumbnail_url: str | None = None

    class Config:
        from_attributes = True
