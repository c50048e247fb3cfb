from streamshelf.models.video import Video
from streamshelf.models.section import Section
from streamshelf.models.section_item import SectionItem

__all__ = ["Video", "Section", "SectionItem"]
