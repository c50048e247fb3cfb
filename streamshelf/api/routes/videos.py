from fastapi import APIRouter, Depends, File, Form, UploadFile

from streamshelf.api.deps import get_catalog, get_owner_id
from streamshelf.schemas.video import VideoOut, VideoUpdate
from streamshelf.services.catalog import CatalogService

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("", response_model=list[VideoOut])
def list_videos(
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    return catalog.list_videos(owner_id)


@router.post("", response_model=VideoOut)
def upload_video(
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
    description: str | None = Form(default=None),
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Upload a video file to the stream provider and register it.

    The video starts in `processing`; a background job moves it to
    `ready` or `error` once the provider finishes.
    """
    return catalog.add_video(
        owner_id,
        file.file,
        file.filename or "",
        title=title,
        description=description,
    )


@router.get("/{video_id}", response_model=VideoOut)
def get_video(
    video_id: str,
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    return catalog.get_video(video_id, owner_id)


@router.patch("/{video_id}", response_model=VideoOut)
def update_video(
    video_id: str,
    body: VideoUpdate,
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    return catalog.update_video(video_id, owner_id, **body.model_dump(exclude_unset=True))


@router.delete("/{video_id}")
def delete_video(
    video_id: str,
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    removed_items = catalog.remove_video(video_id, owner_id)
    return {"ok": True, "removed_section_items": removed_items}


@router.post("/{video_id}/sync", response_model=VideoOut)
def sync_video(
    video_id: str,
    owner_id: str = Depends(get_owner_id),
    catalog: CatalogService = Depends(get_catalog),
):
    """Pull the provider status now instead of waiting for the scheduler."""
    video = catalog.get_video(video_id, owner_id)
    return catalog.sync_status(video.id)
