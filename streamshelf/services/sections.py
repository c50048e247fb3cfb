"""
Section Ordering Service - ordered, flaggable video collections.

Order conventions:
    - add_item appends at 1 + max(order) in the section (first item is 1)
    - reorder_items renumbers the named items to 0..N-1 by payload position
    - remove_item leaves gaps; only reorder_items closes them
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from streamshelf.core.errors import Conflict, InternalError, NotFound, ValidationError
from streamshelf.core.logging import OwnerContext
from streamshelf.db.repositories import SectionItemRepository, SectionRepository
from streamshelf.models import Section, SectionItem
from streamshelf.services.catalog import CatalogService

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = [
    {
        "title": "Featured",
        "slug": "featured",
        "description": "Highlighted content shown with a large thumbnail",
    },
    {
        "title": "For You",
        "slug": "for_you",
        "description": "Videos recommended for the viewer",
    },
    {
        "title": "Trending",
        "slug": "trending",
        "description": "Videos people are talking about",
    },
    {
        "title": "Popular in the Community",
        "slug": "community_popular",
        "description": "Videos popular with the community",
    },
]

SECTION_FIELDS = ("title", "description", "is_active")


def _field(entry, name: str, default=None):
    if isinstance(entry, dict):
        return entry.get(name, default)
    return getattr(entry, name, default)


class SectionService:
    def __init__(self, db: Session, catalog: Optional[CatalogService] = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)
        self.sections = SectionRepository(db)
        self.items = SectionItemRepository(db)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def get_section(self, section_id: str, owner_id: str) -> Section:
        section = self.sections.get_for_owner(section_id, owner_id)
        if not section:
            raise NotFound("section")
        return section

    def list_sections(self, owner_id: str, limit: Optional[int] = None) -> list[Section]:
        """Sections by order, each with its items by order."""
        return self.sections.get_by_owner(owner_id, limit=limit)

    def create_section(
        self,
        owner_id: str,
        title: str,
        slug: str,
        description: Optional[str] = None,
    ) -> Section:
        title = (title or "").strip()
        slug = (slug or "").strip()
        if not title or not slug:
            raise ValidationError("Title and slug are required")

        if self.sections.get_by_slug(owner_id, slug):
            raise Conflict("slug", "Section with this slug already exists")

        section = self.sections.create(
            owner_id=owner_id,
            title=title,
            slug=slug,
            description=description or None,
            is_active=True,
            order=self.sections.max_order(owner_id) + 1,
        )
        self._commit("create_section", conflict=Conflict("slug", "Section with this slug already exists"))
        logger.info(f"[sections] Created section {slug} (order={section.order}) for {owner_id}")
        return section

    def update_section(self, section_id: str, owner_id: str, **fields) -> Section:
        section = self.get_section(section_id, owner_id)
        changes = {k: v for k, v in fields.items() if k in SECTION_FIELDS}
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Title must not be empty")
        if "is_active" in changes and changes["is_active"] is None:
            raise ValidationError("is_active must be true or false")

        for key, value in changes.items():
            setattr(section, key, value)

        self._commit("update_section")
        logger.info(f"[sections] Updated section {section_id}: {sorted(changes)}")
        return section

    def delete_section(self, section_id: str, owner_id: str) -> int:
        section = self.get_section(section_id, owner_id)
        removed = self.items.count_by_section(section.id)
        # section_items rows go with the section (ORM and ON DELETE CASCADE)
        self.db.delete(section)
        self._commit("delete_section")
        logger.info(f"[sections] Deleted section {section_id} with {removed} items")
        return removed

    def seed_default_sections(self, owner_id: str) -> list[Section]:
        """Create the default sections the owner does not have yet."""
        created = []
        for spec in DEFAULT_SECTIONS:
            if self.sections.get_by_slug(owner_id, spec["slug"]):
                continue
            created.append(self.create_section(owner_id, **spec))
        if created:
            logger.info(f"[sections] Seeded {len(created)} default sections for {owner_id}")
        return created

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def list_items(self, section_id: str) -> list[SectionItem]:
        return self.items.get_by_section(section_id)

    def add_item(
        self,
        section_id: str,
        owner_id: str,
        video_id: str,
        is_featured: bool = False,
    ) -> SectionItem:
        if not video_id:
            raise ValidationError("Video ID is required")

        with OwnerContext(owner_id=owner_id, video_id=video_id):
            section = self.get_section(section_id, owner_id)
            video = self.catalog.get_video(video_id, owner_id)

            if self.items.get_pair(section.id, video.id):
                raise Conflict("duplicate", "Video already exists in this section")

            item = self.items.create(
                section_id=section.id,
                video_id=video.id,
                order=self.items.max_order(section.id) + 1,
                is_featured=bool(is_featured),
            )
            self._commit("add_item", conflict=Conflict("duplicate", "Video already exists in this section"))
            logger.info(f"[sections] Added video {video.id} to {section.slug} at order {item.order}")
            return item

    def reorder_items(self, section_id: str, owner_id: str, items: Iterable) -> list[SectionItem]:
        """
        Replace order and featured flags for the named items.

        Each entry carries an item id and is_featured; its position in
        ``items`` becomes the new order. Items left out keep their values.
        """
        if not isinstance(items, (list, tuple)):
            raise ValidationError("Items must be an array")

        with OwnerContext(owner_id=owner_id):
            section = self.get_section(section_id, owner_id)
            updates = [
                (_field(entry, "id"), index, bool(_field(entry, "is_featured", False)))
                for index, entry in enumerate(items)
            ]
            self._apply_item_updates(section, updates)
            self._commit("reorder_items")
            logger.info(f"[sections] Reordered {len(updates)} items in {section.slug}")
            return self.items.get_by_section(section.id)

    def toggle_featured(self, section_id: str, owner_id: str, item_id: str) -> list[SectionItem]:
        """Flip one item's featured flag. Every other item keeps its order and flag."""
        with OwnerContext(owner_id=owner_id):
            section = self.get_section(section_id, owner_id)
            current = self.items.get_by_section(section.id)
            if not any(item.id == item_id for item in current):
                raise NotFound("item")

            updates = [
                (item.id, item.order, (not item.is_featured) if item.id == item_id else item.is_featured)
                for item in current
            ]
            self._apply_item_updates(section, updates)
            self._commit("toggle_featured")
            logger.info(f"[sections] Toggled featured on item {item_id} in {section.slug}")
            return self.items.get_by_section(section.id)

    def remove_item(self, item_id: str, section_id: str, owner_id: str) -> bool:
        """Delete an item from a section. Missing items are not an error."""
        section = self.get_section(section_id, owner_id)
        item = self.items.get_in_section(item_id, section.id)
        if item is None:
            return False
        self.db.delete(item)
        self._commit("remove_item")
        logger.info(f"[sections] Removed item {item_id} from {section.slug}")
        return True

    def _apply_item_updates(self, section: Section, updates: list[tuple]) -> None:
        """Validate every update first, then write them in the open transaction."""
        ids = [item_id for item_id, _, _ in updates]
        if any(not item_id for item_id in ids):
            raise ValidationError("Every item needs an id")
        if len(set(ids)) != len(ids):
            raise ValidationError("Items must not repeat")

        existing = {item.id: item for item in self.items.get_by_section(section.id)}
        missing = [item_id for item_id in ids if item_id not in existing]
        if missing:
            raise NotFound("item", f"Items not found in section: {', '.join(missing)}")

        for item_id, order, is_featured in updates:
            item = existing[item_id]
            if item.order != order:
                item.order = order
            if item.is_featured != is_featured:
                item.is_featured = is_featured

    def _commit(self, action: str, conflict: Optional[Conflict] = None) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"[sections] {action} integrity error: {e.orig}")
            if conflict is not None:
                raise conflict from e
            raise InternalError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"[sections] {action} failed")
            raise InternalError() from e
