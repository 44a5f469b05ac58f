"""
Pixverse API client for media upload and lip-sync video generation.

This module provides integration with the Pixverse creative platform for:
- Upload credential issuance and signed OSS uploads
- Media registration
- Lip-sync job creation
- Last-frame extraction
- Job status lookup and polling
"""

import asyncio
import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any, BinaryIO, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pixverse.core.config import Settings, get_settings
from pixverse.core.exceptions import APIError, ExternalServiceError, ValidationError
from pixverse.integrations.base_client import BaseHTTPClient, RetryPolicy
from pixverse.integrations.oss_client import OSSUploader
from pixverse.schemas.common import Envelope
from pixverse.schemas.media import (
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

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

UPLOAD_TOKEN_PATH = "/creative_platform/getUploadToken"
MEDIA_UPLOAD_PATH = "/creative_platform/media/upload"
LIP_SYNC_PATH = "/creative_platform/video/lip_sync"
LAST_FRAME_PATH = "/creative_platform/video/frame/last"
VIDEO_DETAIL_PATH = "/creative_platform/video/list/detail"


class PixverseClient(BaseHTTPClient):
    """
    Pixverse API client.

    Control-plane calls go through the retrying executor; the media
    upload itself is a single signed PUT to object storage.

    Example:
        ```python
        async with PixverseClient(token="...") as client:
            media = await client.upload_file(video_bytes, "clip.mp4")

            job = await client.create_lip_sync(
                LipSyncRequest(
                    customer_video_path=media.path,
                    customer_video_url=media.url,
                    customer_video_duration=5,
                    lip_sync_tts_content="Hello there!",
                )
            )

            details = await client.wait_for_video(job.resp.video_id)
        ```
    """

    def __init__(
        self,
        token: str | None = None,
        headers: Mapping[str, str] | None = None,
        settings: Settings | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        timeout: float | None = None,
        retry_policy: RetryPolicy | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the Pixverse client.

        Args:
            token: Auth token (uses settings if not provided)
            headers: Extra headers for every control-plane call, merged
                over the ones from settings
            settings: Client settings instance
            max_retries: Retries after the first attempt
            retry_delay: Fixed delay in seconds between attempts
            timeout: Request timeout in seconds
            retry_policy: Decides whether a failed attempt is retried
            client: Pre-built httpx client (not closed by this instance)
        """
        settings = settings or get_settings()
        token = token or settings.token

        if not token:
            raise ValidationError(
                message="Pixverse token is required",
                field="token",
            )

        super().__init__(
            base_url=settings.base_url,
            settings=settings,
            max_retries=max_retries,
            retry_delay=retry_delay,
            timeout=timeout,
            retry_policy=retry_policy,
            client=client,
        )

        self._token = token
        self._extra_headers = {**settings.headers, **(headers or {})}
        self._uploader = OSSUploader(
            client=self._client, settings=settings, timeout=self._timeout
        )

    @property
    def service_name(self) -> str:
        """Return service name for logging."""
        return "Pixverse"

    def _get_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        origin = self._settings.web_origin.rstrip("/")
        return {
            "Content-Type": "application/json",
            "User-Agent": self._settings.user_agent,
            "X-Platform": "Web",
            "Referer": f"{origin}/",
            "Origin": origin,
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-site",
            "Sec-GPC": "1",
            "Accept": "application/json, text/plain, */*",
            "Accept-Language": "en-US",
            "Ai-Trace-Id": str(uuid.uuid4()),
            "Token": self._token,
            **self._extra_headers,
        }

    def _check_payload(self, data: Any) -> None:
        """Reject envelopes whose ErrCode is not 0."""
        if not isinstance(data, dict) or "ErrCode" not in data:
            raise ExternalServiceError(
                service=self.service_name,
                message="Unexpected response shape from Pixverse API",
                original_error=str(data)[:500],
            )

        err_code = data["ErrCode"]
        if err_code != 0:
            raise APIError(
                service=self.service_name,
                err_code=err_code,
                err_msg=str(data.get("ErrMsg", "")),
            )

    def _parse_envelope(self, data: dict[str, Any], payload_type: type[ModelT]) -> Envelope[ModelT]:
        try:
            return Envelope[payload_type].model_validate(data)  # type: ignore[valid-type]
        except PydanticValidationError as e:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"Malformed {payload_type.__name__} payload",
                original_error=str(e)[:500],
            ) from e

    def _coerce_request(self, request: ModelT | Mapping[str, Any], model: type[ModelT]) -> ModelT:
        if isinstance(request, model):
            return request
        try:
            return model.model_validate(request)
        except PydanticValidationError as e:
            raise ValidationError(
                message=f"Invalid {model.__name__}: {e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def get_upload_token(self) -> UploadToken:
        """
        Get a short-lived object-storage upload credential.

        Returns:
            UploadToken for a single upload session

        Raises:
            ExternalServiceError: If the API request fails
        """
        data = await self._post(UPLOAD_TOKEN_PATH)
        return self._parse_envelope(data, UploadToken).resp

    async def upload_to_oss(
        self,
        data: bytes | BinaryIO,
        file_name: str,
        upload_token: UploadToken,
        content_type: str | None = None,
    ) -> OSSUploadResult:
        """
        Upload a file to Pixverse object storage.

        Not retried; call again to retry with a new object name and
        signature.

        Args:
            data: File content as bytes or file-like object
            file_name: Original file name (used for its extension only)
            upload_token: Credential from get_upload_token()
            content_type: MIME type (guessed from file_name if not provided)

        Returns:
            OSSUploadResult ready to pass to upload_media()

        Raises:
            UploadError: If storage rejects the upload
        """
        return await self._uploader.upload(
            data=data,
            file_name=file_name,
            upload_token=upload_token,
            content_type=content_type,
        )

    async def upload_media(
        self,
        request: MediaUploadRequest | Mapping[str, Any],
    ) -> MediaUploadResponse:
        """
        Register an uploaded object as media.

        Args:
            request: Object name, path and type (an OSSUploadResult works)

        Returns:
            MediaUploadResponse with the media path and URL
        """
        upload_request = self._coerce_request(request, MediaUploadRequest)
        data = await self._post(MEDIA_UPLOAD_PATH, json_data=upload_request.to_payload())
        media = self._parse_envelope(data, MediaUploadResponse).resp

        logger.info(
            "Pixverse media registered",
            extra={"path": media.path},
        )

        return media

    async def upload_file(
        self,
        data: bytes | BinaryIO,
        file_name: str,
        content_type: str | None = None,
    ) -> MediaUploadResponse:
        """
        Upload and register a file in one go.

        Fetches an upload credential, uploads the file to object storage
        and registers the stored object as media.

        Args:
            data: File content as bytes or file-like object
            file_name: Original file name
            content_type: MIME type (guessed from file_name if not provided)

        Returns:
            MediaUploadResponse for the registered media
        """
        upload_token = await self.get_upload_token()
        stored = await self.upload_to_oss(
            data=data,
            file_name=file_name,
            upload_token=upload_token,
            content_type=content_type,
        )
        return await self.upload_media(stored)

    async def create_lip_sync(
        self,
        request: LipSyncRequest | Mapping[str, Any],
    ) -> Envelope[LipSyncJob]:
        """
        Create a lip-sync job.

        Args:
            request: Source video, duration and text to speak

        Returns:
            Envelope whose payload carries the new job's video_id

        Raises:
            ValidationError: If the video path or text is empty, or the
                duration is not positive (no request is sent)
            ExternalServiceError: If job submission fails
        """
        lip_sync = self._coerce_request(request, LipSyncRequest)

        if not lip_sync.customer_video_path or not lip_sync.lip_sync_tts_content:
            missing = (
                "customer_video_path"
                if not lip_sync.customer_video_path
                else "lip_sync_tts_content"
            )
            raise ValidationError(
                message=(
                    "Missing required fields: customer_video_path and "
                    "lip_sync_tts_content are required"
                ),
                field=missing,
            )

        if lip_sync.customer_video_duration <= 0:
            raise ValidationError(
                message="Invalid video duration: must be greater than 0",
                field="customer_video_duration",
            )

        logger.info(
            "Creating Pixverse lip-sync job",
            extra={
                "video_path": lip_sync.customer_video_path,
                "duration": lip_sync.customer_video_duration,
                "text_length": len(lip_sync.lip_sync_tts_content),
            },
        )

        data = await self._post(
            LIP_SYNC_PATH,
            json_data=lip_sync.to_payload(),
            headers={"Refresh": "credit"},
        )
        envelope = self._parse_envelope(data, LipSyncJob)

        logger.info(
            "Pixverse lip-sync job created",
            extra={"video_id": envelope.resp.video_id},
        )

        return envelope

    async def get_last_video_frame(
        self,
        request: LastVideoFrameRequest | Mapping[str, Any],
    ) -> Envelope[LastFrame]:
        """
        Extract the last frame of a stored video.

        Raises:
            ValidationError: If video_path is empty or duration is not positive
        """
        frame_request = self._coerce_request(request, LastVideoFrameRequest)

        if not frame_request.video_path or frame_request.duration <= 0:
            raise ValidationError(
                message=(
                    "Missing required fields: video_path and duration must be "
                    "provided and duration must be greater than 0"
                ),
                field="video_path" if not frame_request.video_path else "duration",
            )

        data = await self._post(LAST_FRAME_PATH, json_data=frame_request.to_payload())
        return self._parse_envelope(data, LastFrame)

    async def get_video_details(
        self,
        request: VideoDetailsRequest | Mapping[str, Any],
    ) -> Envelope[VideoDetails]:
        """
        Look up a video job.

        Raises:
            ValidationError: If video_id is missing or zero
        """
        details_request = self._coerce_request(request, VideoDetailsRequest)

        if not details_request.video_id:
            raise ValidationError(
                message="Missing required field: video_id must be provided",
                field="video_id",
            )

        data = await self._post(VIDEO_DETAIL_PATH, json_data=details_request.to_payload())
        envelope = self._parse_envelope(data, VideoDetails)

        logger.debug(
            "Pixverse video status",
            extra={
                "video_id": details_request.video_id,
                "status": envelope.resp.video_status,
            },
        )

        return envelope

    async def wait_for_video(
        self,
        video_id: int | str,
        poll_interval: float = 10.0,
        max_poll_time: float = 600.0,
    ) -> VideoDetails:
        """
        Wait for a video job to finish.

        Polls the detail endpoint until the job reaches a terminal status
        or the time budget runs out.

        Args:
            video_id: Job identifier
            poll_interval: Seconds between polls
            max_poll_time: Maximum seconds to wait

        Returns:
            VideoDetails of the succeeded job

        Raises:
            ExternalServiceError: If generation fails or times out
        """
        start_time = time.time()

        logger.info(
            "Waiting for Pixverse video completion",
            extra={"video_id": video_id, "max_poll_time": max_poll_time},
        )

        while True:
            details = (await self.get_video_details({"video_id": video_id})).resp
            status = details.status

            if status is VideoStatus.SUCCEEDED:
                logger.info(
                    "Pixverse video completed",
                    extra={"video_id": video_id, "video_url": details.video_url},
                )
                return details

            if status is not None and status.is_failure:
                raise ExternalServiceError(
                    service=self.service_name,
                    message=f"Video generation failed (status: {status.name})",
                    original_error=str(details.video_status),
                )

            elapsed = time.time() - start_time
            if elapsed >= max_poll_time:
                raise ExternalServiceError(
                    service=self.service_name,
                    message=f"Video generation timed out after {elapsed:.0f} seconds",
                )

            logger.debug(
                "Pixverse video still processing",
                extra={
                    "video_id": video_id,
                    "status": details.video_status,
                    "elapsed_seconds": elapsed,
                },
            )

            await asyncio.sleep(poll_interval)


def get_pixverse_client(
    token: str | None = None,
    headers: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> PixverseClient:
    """
    Factory function to create a Pixverse client.

    Args:
        token: Auth token (uses settings if not provided)
        headers: Extra headers for every control-plane call
        settings: Optional settings override

    Returns:
        Configured PixverseClient instance
    """
    return PixverseClient(token=token, headers=headers, settings=settings)
