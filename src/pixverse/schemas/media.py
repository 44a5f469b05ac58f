"""
Media upload schemas.

Covers the short-lived upload credential, the result of a signed
object-storage upload and the media registration call that follows it.
"""

from enum import IntEnum

from pydantic import Field

from pixverse.schemas.common import WireModel

VIDEO_MP4 = "video/mp4"


class MediaType(IntEnum):
    """Coarse media classification understood by the media registry."""

    VIDEO = 1
    OTHER = 2

    @classmethod
    def from_content_type(cls, content_type: str | None) -> "MediaType":
        """Only ``video/mp4`` counts as video; everything else is OTHER."""
        return cls.VIDEO if content_type == VIDEO_MP4 else cls.OTHER


class UploadToken(WireModel):
    """
    Upload credential issued by the control-plane.

    Valid for a single upload session. Secret fields are excluded
    from ``repr`` so the credential can be logged safely.

    Attributes:
        access_key: Storage access key id
        secret_key: Storage secret used to sign the upload
        security_token: Session token sent with the upload
    """

    access_key: str = Field(alias="Ak")
    secret_key: str = Field(alias="Sk", repr=False)
    security_token: str = Field(alias="Token", repr=False)


class MediaUploadRequest(WireModel):
    """
    Registration request for an object already placed in storage.

    Attributes:
        name: Generated object name
        path: Object key within the bucket
        type: Media type code (1 = video, 2 = other)
    """

    name: str
    path: str
    type: int


class OSSUploadResult(MediaUploadRequest):
    """Location and classification of a freshly uploaded object."""


class MediaUploadResponse(WireModel):
    """
    Media registration response.

    Attributes:
        path: Stored media path
        url: Public URL of the media
    """

    path: str = ""
    url: str = ""
    media_duration: float | None = None
