"""
Signed object-storage uploader for Pixverse media.

Uploads a single binary object to the Pixverse OSS bucket using the
short-lived credential issued by the control-plane. Each upload is one
PUT with no retry; calling upload() again produces a new object name,
timestamp and signature.
"""

import logging
import mimetypes
from typing import BinaryIO

import httpx

from pixverse.core.config import Settings, get_settings
from pixverse.core.exceptions import ExternalServiceError, UploadError
from pixverse.integrations import oss_signer
from pixverse.schemas.media import OSSUploadResult, UploadToken

logger = logging.getLogger(__name__)

SERVICE_NAME = "Pixverse OSS"


class OSSUploader:
    """
    Object-storage client for signed media uploads.

    Example:
        ```python
        uploader = OSSUploader(client=http_client)

        result = await uploader.upload(
            data=video_bytes,
            file_name="clip.mp4",
            upload_token=token,
        )
        # result.path == "upload/<uuid>.mp4", result.type == 1
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the uploader.

        Args:
            client: HTTP client used for the PUT
            settings: Client settings instance
            timeout: Upload timeout in seconds
        """
        self._client = client
        self._settings = settings or get_settings()
        self._timeout = self._settings.timeout if timeout is None else timeout

    def _guess_content_type(self, file_name: str) -> str:
        """
        Guess content type from file extension.

        Returns:
            MIME type string, defaults to application/octet-stream
        """
        content_type, _ = mimetypes.guess_type(file_name)
        return content_type or "application/octet-stream"

    def object_key(self, object_name: str) -> str:
        return f"{self._settings.oss_upload_prefix}/{object_name}"

    def object_url(self, object_key: str) -> str:
        return f"{self._settings.oss_endpoint.rstrip('/')}/{object_key}"

    def build_headers(
        self,
        object_key: str,
        content_type: str,
        upload_token: UploadToken,
        date: str,
    ) -> dict[str, str]:
        """
        Compose the signed header set for a PUT of ``object_key``.

        The same ``date`` value is signed and sent as ``x-oss-date``.
        """
        oss_headers = {
            "x-oss-date": date,
            "x-oss-security-token": upload_token.security_token,
            "x-oss-forbid-overwrite": "true",
            "x-oss-user-agent": self._settings.oss_user_agent,
        }
        string_to_sign = oss_signer.build_string_to_sign(
            method="PUT",
            content_type=content_type,
            date=date,
            oss_headers=oss_headers,
            canonical_resource=oss_signer.build_canonical_resource(
                self._settings.oss_bucket, object_key
            ),
        )
        signature = oss_signer.sign(string_to_sign, upload_token.secret_key)
        logger.debug("Signed OSS upload", extra={"key": object_key, "signature": signature})

        return {
            "Accept": "*/*",
            **oss_headers,
            "Access-Control-Allow-Origin": "*",
            "Content-Type": content_type,
            "authorization": oss_signer.authorization_header(
                upload_token.access_key, signature
            ),
        }

    async def upload(
        self,
        data: bytes | BinaryIO,
        file_name: str,
        upload_token: UploadToken,
        content_type: str | None = None,
    ) -> OSSUploadResult:
        """
        Upload data under a freshly generated object name.

        Args:
            data: File content as bytes or file-like object
            file_name: Original file name (used for its extension only)
            upload_token: Credential from get_upload_token()
            content_type: MIME type (guessed from file_name if not provided)

        Returns:
            OSSUploadResult with the object name, key and media type code

        Raises:
            UploadError: If storage answers with a non-2xx status
            ExternalServiceError: If the PUT cannot be sent
        """
        # Convert file-like to bytes if needed
        if hasattr(data, "read"):
            data = data.read()  # type: ignore

        if not isinstance(data, bytes):
            raise ValueError("Data must be bytes or a file-like object")

        if content_type is None:
            content_type = self._guess_content_type(file_name)

        name = oss_signer.build_object_name(file_name)
        key = self.object_key(name)
        headers = self.build_headers(key, content_type, upload_token, oss_signer.http_date())

        logger.info(
            "Uploading file to OSS",
            extra={
                "key": key,
                "content_type": content_type,
                "size_bytes": len(data),
            },
        )

        try:
            response = await self._client.put(
                self.object_url(key),
                content=data,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.RequestError as e:
            raise ExternalServiceError(
                service=SERVICE_NAME,
                message="Failed to upload file to OSS",
                original_error=str(e),
            ) from e

        if not response.is_success:
            body = response.text or response.reason_phrase
            logger.error(
                "OSS upload failed",
                extra={
                    "key": key,
                    "status_code": response.status_code,
                    "error": body[:500],
                },
            )
            raise UploadError(
                service=SERVICE_NAME,
                status_code=response.status_code,
                body=body,
            )

        logger.info("File uploaded successfully", extra={"key": key})

        return OSSUploadResult(
            name=name,
            path=key,
            type=int(oss_signer.classify_media_type(content_type)),
        )
