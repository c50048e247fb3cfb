from enum import Enum

class VideoStatus(str, Enum):
    # Initial state, set when the upload completes
    PROCESSING = "processing"

    # Terminal states
    READY = "ready"
    ERROR = "error"


class StreamState(str, Enum):
    """States reported by the stream provider for an uploaded video."""
    PENDING_UPLOAD = "pendingupload"
    DOWNLOADING = "downloading"
    QUEUED = "queued"
    INPROGRESS = "inprogress"
    READY = "ready"
    ERROR = "error"


def video_status_for(state: str) -> VideoStatus:
    """Map a provider state onto the catalog's status machine."""
    if state == StreamState.READY.value:
        return VideoStatus.READY
    if state == StreamState.ERROR.value:
        return VideoStatus.ERROR
    return VideoStatus.PROCESSING
