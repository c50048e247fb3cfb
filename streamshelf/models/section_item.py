from datetime import datetime

from sqlalchemy import String, Boolean, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from streamshelf.db.base import Base
from streamshelf.models.video import utcnow


class SectionItem(Base):
    __tablename__ = "section_items"
    # No unique index on (section_id, order): a partial reorder may
    # transiently share an order value with an untouched item.
    __table_args__ = (
        UniqueConstraint("section_id", "video_id", name="uq_section_items_section_video"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    section_id: Mapped[str] = mapped_column(
        String, ForeignKey("sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    video_id: Mapped[str] = mapped_column(
        String, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True
    )

    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=1)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    section: Mapped["Section"] = relationship(back_populates="items")
    video: Mapped["Video"] = relationship(back_populates="section_items", lazy="joined")
