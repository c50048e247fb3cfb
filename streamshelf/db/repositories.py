from typing import TypeVar, Generic, Type, Optional
from uuid import uuid4
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload
from streamshelf.db.base import Base

T = TypeVar("T", bound=Base)

class BaseRepository(Generic[T]):
    """Generic repository for CRUD operations."""

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def get_by_id(self, id: str) -> Optional[T]:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def create(self, **kwargs) -> T:
        if "id" not in kwargs:
            kwargs["id"] = str(uuid4())
        instance = self.model(**kwargs)
        self.db.add(instance)
        return instance


class OwnedRepository(BaseRepository[T]):
    """Repository for models scoped by owner_id."""

    def get_for_owner(self, id: str, owner_id: str) -> Optional[T]:
        return self.db.query(self.model).filter(
            self.model.id == id,
            self.model.owner_id == owner_id,
        ).first()

    def count_for_owner(self, owner_id: str) -> int:
        return self.db.query(func.count(self.model.id)).filter(
            self.model.owner_id == owner_id
        ).scalar() or 0


class VideoRepository(OwnedRepository):
    """Repository for Video operations."""

    def __init__(self, db: Session):
        from streamshelf.models import Video
        super().__init__(db, Video)

    def get_by_provider_id(self, provider_video_id: str):
        return self.db.query(self.model).filter(
            self.model.provider_video_id == provider_video_id
        ).first()

    def get_by_owner(self, owner_id: str, limit: Optional[int] = None):
        q = self.db.query(self.model).filter(
            self.model.owner_id == owner_id
        ).order_by(self.model.created_at.desc(), self.model.id.desc())
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def get_by_status(self, status: str, limit: Optional[int] = None):
        q = self.db.query(self.model).filter(
            self.model.status == status
        ).order_by(self.model.created_at.asc())
        if limit is not None:
            q = q.limit(limit)
        return q.all()


class SectionRepository(OwnedRepository):
    """Repository for Section operations."""

    def __init__(self, db: Session):
        from streamshelf.models import Section
        super().__init__(db, Section)

    def get_by_slug(self, owner_id: str, slug: str):
        return self.db.query(self.model).filter(
            self.model.owner_id == owner_id,
            self.model.slug == slug,
        ).first()

    def get_by_owner(self, owner_id: str, limit: Optional[int] = None):
        """Sections by order with items and their videos loaded."""
        from streamshelf.models import SectionItem
        q = self.db.query(self.model).options(
            selectinload(self.model.items).joinedload(SectionItem.video)
        ).filter(
            self.model.owner_id == owner_id
        ).order_by(self.model.order.asc(), self.model.created_at.asc()).populate_existing()
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def max_order(self, owner_id: str) -> int:
        return self.db.execute(
            select(func.coalesce(func.max(self.model.order), 0)).where(
                self.model.owner_id == owner_id
            )
        ).scalar_one()


class SectionItemRepository(BaseRepository):
    """Repository for SectionItem operations."""

    def __init__(self, db: Session):
        from streamshelf.models import SectionItem
        super().__init__(db, SectionItem)

    def get_by_section(self, section_id: str):
        return self.db.query(self.model).filter(
            self.model.section_id == section_id
        ).order_by(self.model.order.asc(), self.model.created_at.asc()).all()

    def get_in_section(self, item_id: str, section_id: str):
        return self.db.query(self.model).filter(
            self.model.id == item_id,
            self.model.section_id == section_id,
        ).first()

    def get_pair(self, section_id: str, video_id: str):
        return self.db.query(self.model).filter(
            self.model.section_id == section_id,
            self.model.video_id == video_id,
        ).first()

    def count_by_section(self, section_id: str) -> int:
        return self.db.query(func.count(self.model.id)).filter(
            self.model.section_id == section_id
        ).scalar() or 0

    def max_order(self, section_id: str) -> int:
        return self.db.execute(
            select(func.coalesce(func.max(self.model.order), 0)).where(
                self.model.section_id == section_id
            )
        ).scalar_one()

    def delete_by_video(self, video_id: str) -> int:
        return self.db.query(self.model).filter(
            self.model.video_id == video_id
        ).delete(synchronize_session="fetch")
