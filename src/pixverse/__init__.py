"""
pixverse - Async client for the Pixverse creative platform API.

Supports:
- Signed media uploads to Pixverse object storage
- Media registration
- Lip-sync video generation and last-frame extraction
- Job status lookup and polling
"""

from pixverse.core.config import Settings, get_settings
from pixverse.core.exceptions import (
    APIError,
    ExternalServiceError,
    PixverseException,
    UploadError,
    ValidationError,
)
from pixverse.integrations.pixverse_client import PixverseClient, get_pixverse_client
from pixverse.schemas import (
    Envelope,
    LastFrame,
    LastVideoFrameRequest,
    LipSyncJob,
    LipSyncRequest,
    MediaType,
    MediaUploadRequest,
    MediaUploadResponse,
    OSSUploadResult,
    UploadToken,
    VideoDetails,
    VideoDetailsRequest,
    VideoStatus,
)

__version__ = "0.1.0"

create_client = get_pixverse_client

__all__ = [
    "create_client",
    "get_pixverse_client",
    "PixverseClient",
    "Settings",
    "get_settings",
    # Errors
    "PixverseException",
    "ValidationError",
    "ExternalServiceError",
    "APIError",
    "UploadError",
    # Schemas
    "Envelope",
    "LastFrame",
    "LastVideoFrameRequest",
    "LipSyncJob",
    "LipSyncRequest",
    "MediaType",
    "MediaUploadRequest",
    "MediaUploadResponse",
    "OSSUploadResult",
    "UploadToken",
    "VideoDetails",
    "VideoDetailsRequest",
    "VideoStatus",
]
