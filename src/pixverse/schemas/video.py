"""
Video job schemas: lip-sync creation, last-frame extraction and job detail.
"""

from enum import IntEnum

from pixverse.schemas.common import WireModel


class VideoStatus(IntEnum):
    """Job status codes reported by the video detail endpoint."""

    SUCCEEDED = 1
    GENERATING = 5
    MODERATION_FAILED = 7
    FAILED = 8

    @property
    def is_terminal(self) -> bool:
        return self is not VideoStatus.GENERATING

    @property
    def is_failure(self) -> bool:
        return self in (VideoStatus.MODERATION_FAILED, VideoStatus.FAILED)


class LipSyncRequest(WireModel):
    """
    Lip-sync job request.

    Attributes:
        customer_video_path: Storage path of the source video
        lip_sync_tts_content: Text the subject should speak
        customer_video_duration: Source video duration in seconds
        lip_sync_tts_speaker_id: TTS voice identifier
        model: Generation model name
        customer_video_url: Public URL of the source video
        customer_video_last_frame_url: URL of the source video's last frame
        credit_change: Credits the job is expected to consume
    """

    customer_video_path: str = ""
    lip_sync_tts_content: str = ""
    customer_video_duration: int | float = 0
    lip_sync_tts_speaker_id: str | None = None
    model: str | None = None
    customer_video_url: str | None = None
    customer_video_last_frame_url: str | None = None
    credit_change: int | None = None


class LipSyncJob(WireModel):
    """Identifier of a created lip-sync job."""

    video_id: int | str


class LastVideoFrameRequest(WireModel):
    video_path: str = ""
    duration: int | float = 0


class LastFrame(WireModel):
    last_frame: str


class VideoDetailsRequest(WireModel):
    video_id: int | str | None = None
    platform: str | None = None


class VideoDetails(WireModel):
    """
    Job detail as returned by the detail lookup.

    Attributes:
        video_id: Job identifier
        video_url: Result video URL (set once generation succeeds)
        video_path: Result video storage path
        video_duration: Result duration in seconds
        video_status: Raw status code, see VideoStatus
        video_type: Job type code
        create_time: Creation timestamp as reported by the API
        update_time: Last update timestamp as reported by the API
    """

    video_id: int | str
    video_url: str = ""
    video_path: str = ""
    video_duration: int | float = 0
    video_status: int = VideoStatus.GENERATING
    video_type: int = 0
    create_time: str = ""
    update_time: str = ""

    @property
    def status(self) -> VideoStatus | None:
        """Status as a known VideoStatus, or None for unrecognised codes."""
        try:
            return VideoStatus(self.video_status)
        except ValueError:
            return None
