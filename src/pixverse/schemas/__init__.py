"""
Pydantic schemas for Pixverse control-plane requests and responses.
"""

from pixverse.schemas.common import Envelope, WireModel
from pixverse.schemas.media import (
    MediaType,
    MediaUploadRequest,
    MediaUploadResponse,
    OSSUploadResult,
    UploadToken,
)
from pixverse.schemas.video import (
    LastFrame,
    LastVideoFrameRequest,
    LipSyncJob,
    LipSyncRequest,
    VideoDetails,
    VideoDetailsRequest,
    VideoStatus,
)

__all__ = [
    # Common
    "Envelope",
    "WireModel",
    # Media
    "MediaType",
    "MediaUploadRequest",
    "MediaUploadResponse",
    "OSSUploadResult",
    "UploadToken",
    # Video
    "LastFrame",
    "LastVideoFrameRequest",
    "LipSyncJob",
    "LipSyncRequest",
    "VideoDetails",
    "VideoDetailsRequest",
    "VideoStatus",
]
