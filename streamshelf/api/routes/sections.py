from fastapi import APIRouter, Depends

from streamshelf.api.deps import get_owner_id, get_section_service
from streamshelf.schemas.section import (
    ReorderItemsIn,
    SectionCreate,
    SectionItemCreate,
    SectionItemOut,
    SectionOut,
    SectionUpdate,
)
from streamshelf.services.sections import SectionService

router = APIRouter(prefix="/api/sections", tags=["sections"])


@router.get("", response_model=list[SectionOut])
def list_sections(
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.list_sections(owner_id)


@router.post("", response_model=SectionOut)
def create_section(
    body: SectionCreate,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.create_section(owner_id, body.title, body.slug, body.description)


@router.post("/seed", response_model=list[SectionOut])
def seed_sections(
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    """Create the default sections that are missing for this owner."""
    return sections.seed_default_sections(owner_id)


@router.get("/{section_id}", response_model=SectionOut)
def get_section(
    section_id: str,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.get_section(section_id, owner_id)


@router.patch("/{section_id}", response_model=SectionOut)
def update_section(
    section_id: str,
    body: SectionUpdate,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.update_section(section_id, owner_id, **body.model_dump(exclude_unset=True))


@router.delete("/{section_id}")
def delete_section(
    section_id: str,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    removed = sections.delete_section(section_id, owner_id)
    return {"ok": True, "removed_items": removed}


@router.post("/{section_id}/items", response_model=SectionItemOut)
def add_item(
    section_id: str,
    body: SectionItemCreate,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.add_item(section_id, owner_id, body.video_id, body.is_featured)


@router.put("/{section_id}/items", response_model=list[SectionItemOut])
def reorder_items(
    section_id: str,
    body: ReorderItemsIn,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.reorder_items(section_id, owner_id, body.items)


@router.post("/{section_id}/items/{item_id}/toggle-featured", response_model=list[SectionItemOut])
def toggle_featured(
    section_id: str,
    item_id: str,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    return sections.toggle_featured(section_id, owner_id, item_id)


@router.delete("/{section_id}/items/{item_id}")
def remove_item(
    section_id: str,
    item_id: str,
    owner_id: str = Depends(get_owner_id),
    sections: SectionService = Depends(get_section_service),
):
    deleted = sections.remove_item(item_id, section_id, owner_id)
    return {"ok": True, "deleted": deleted}
