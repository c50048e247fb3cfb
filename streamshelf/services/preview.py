"""
Read models for the dashboard overview and the front-end preview.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from streamshelf.schemas.preview import (
    DashboardOut,
    PreviewItem,
    PreviewOut,
    PreviewSection,
)
from streamshelf.schemas.section import SectionOut
from streamshelf.schemas.video import VideoOut
from streamshelf.services.catalog import CatalogService
from streamshelf.services.sections import SectionService
from streamshelf.services.stream import stream_url, thumbnail_url

FEATURED_SLUG = "featured"
RECENT_VIDEOS = 5
RECENT_SECTIONS = 3


def dashboard_stats(db: Session, owner_id: str) -> DashboardOut:
    catalog = CatalogService(db)
    sections = SectionService(db, catalog)

    all_sections = sections.list_sections(owner_id)
    return DashboardOut(
        total_videos=catalog.videos.count_for_owner(owner_id),
        total_sections=len(all_sections),
        recent_videos=[VideoOut.model_validate(v) for v in catalog.list_videos(owner_id, limit=RECENT_VIDEOS)],
        recent_sections=[SectionOut.model_validate(s) for s in all_sections[:RECENT_SECTIONS]],
    )


def _preview_item(item) -> PreviewItem:
    video = item.video
    return PreviewItem(
        id=item.id,
        order=item.order,
        is_featured=item.is_featured,
        video_id=video.id,
        title=video.title,
        stream_url=stream_url(video.provider_video_id),
        thumbnail_url=video.thumbnail_url or thumbnail_url(video.provider_video_id),
    )


def frontend_preview(db: Session, owner_id: str) -> PreviewOut:
    """Active, non-empty sections as the front end would render them."""
    sections = SectionService(db).list_sections(owner_id)

    rendered = [
        PreviewSection(
            id=s.id,
            title=s.title,
            slug=s.slug,
            description=s.description,
            items=[_preview_item(item) for item in s.items],
        )
        for s in sections
        if s.is_active and s.items
    ]

    hero: Optional[PreviewItem] = None
    featured = next((s for s in rendered if s.slug == FEATURED_SLUG), None)
    if featured:
        hero = next((item for item in featured.items if item.is_featured), None)

    return PreviewOut(hero=hero, sections=rendered)
