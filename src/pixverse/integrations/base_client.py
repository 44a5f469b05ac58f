"""
Base HTTP client with retry logic and common utilities.

This module provides the base class for control-plane API clients with:
- Fixed-delay retry of every failed attempt
- A pluggable retry policy
- Per-attempt request logging
- Error conversion to Pixverse exceptions
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import httpx

from pixverse.core.config import Settings, get_settings
from pixverse.core.exceptions import APIError, ExternalServiceError, PixverseException

logger = logging.getLogger(__name__)

RetryPolicy = Callable[[PixverseException], bool]


def retry_all(error: PixverseException) -> bool:
    """Default policy: every failure is retried, permanent or not."""
    return True


def retry_transient(error: PixverseException) -> bool:
    """
    Opt-in policy that stops retrying failures a retry cannot fix.

    Envelope errors and 4xx responses other than 408/429 are raised
    on the first attempt; everything else is retried.
    """
    if isinstance(error, APIError):
        return False
    status_code = getattr(error, "status_code", None)
    if status_code is not None and 400 <= status_code < 500:
        return status_code in (408, 429)
    return True


class BaseHTTPClient(ABC):
    """
    Abstract base class for JSON control-plane clients.

    Provides common functionality for the API integration:
    - Async HTTP client shared across calls
    - Fixed-delay retry (1 initial attempt + ``max_retries``)
    - Request/response logging
    - Error handling and conversion to Pixverse exceptions

    Subclasses must implement:
    - service_name: Property returning the service name
    - _get_headers(): Method returning default headers
    and may override _check_payload() to reject well-formed responses
    that carry an application-level failure.
    """

    def __init__(
        self,
        base_url: str,
        settings: Settings | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        timeout: float | None = None,
        retry_policy: RetryPolicy | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            base_url: Base URL for API requests
            settings: Client settings instance
            max_retries: Retries after the first attempt
            retry_delay: Fixed delay in seconds between attempts
            timeout: Request timeout in seconds
            retry_policy: Decides whether a failed attempt is retried
            client: Pre-built httpx client (not closed by this instance)
        """
        self._base_url = base_url.rstrip("/")
        self._settings = settings or get_settings()
        self._max_retries = (
            self._settings.max_retries if max_retries is None else max_retries
        )
        self._retry_delay = (
            self._settings.retry_delay if retry_delay is None else retry_delay
        )
        self._timeout = self._settings.timeout if timeout is None else timeout
        self._retry_policy = retry_policy or retry_all

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Return the name of the service for logging and error messages."""
        pass

    @abstractmethod
    def _get_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        pass

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "BaseHTTPClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()

    def _check_payload(self, data: Any) -> None:
        """Raise if a decoded 2xx body reports failure. No-op by default."""

    async def _attempt(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None,
        json_data: dict[str, Any] | None,
        attempt: int,
    ) -> Any:
        """Issue one request and return the decoded, checked body."""
        request_headers = self._get_headers()
        if headers:
            request_headers.update(headers)

        request = self._client.build_request(
            method=method,
            url=url,
            headers=request_headers,
            json=json_data,
            timeout=self._timeout,
        )
        # Never send cookies back to the API; the client's jar is left alone.
        request.headers.pop("Cookie", None)

        start_time = time.time()
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"{self.service_name} request timed out",
                original_error=str(e),
            ) from e
        except httpx.RequestError as e:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"{self.service_name} connection error",
                original_error=str(e),
            ) from e

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"{self.service_name} API request",
            extra={
                "method": method,
                "url": url,
                "status_code": response.status_code,
                "elapsed_ms": elapsed_ms,
                "attempt": attempt + 1,
                "trace_id": request_headers.get("Ai-Trace-Id"),
            },
        )

        if not response.is_success:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"HTTP error! status: {response.status_code}",
                original_error=response.text[:500],
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError(
                service=self.service_name,
                message=f"{self.service_name} returned a non-JSON response",
                original_error=response.text[:500],
                status_code=response.status_code,
            ) from e

        self._check_payload(data)
        return data

    async def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an HTTP request with retry logic.

        Every failure (transport error, non-2xx status, rejected payload)
        is retried after a fixed delay unless the retry policy declines.
        Once the budget is spent the last error is raised unchanged.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API endpoint path
            headers: Per-call headers, overriding the defaults
            json_data: JSON body data

        Returns:
            Decoded JSON body

        Raises:
            ExternalServiceError: If every attempt fails
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        attempt = 0
        while True:
            try:
                return await self._attempt(method, url, headers, json_data, attempt)
            except PixverseException as e:
                if attempt >= self._max_retries or not self._retry_policy(e):
                    logger.error(
                        f"{self.service_name} request failed",
                        extra={
                            "url": url,
                            "attempts": attempt + 1,
                            "error": e.message,
                        },
                    )
                    raise

                logger.warning(
                    f"{self.service_name} request failed, retrying",
                    extra={
                        "attempt": attempt + 1,
                        "max_retries": self._max_retries,
                        "delay_seconds": self._retry_delay,
                        "error": e.message,
                    },
                )
                await asyncio.sleep(self._retry_delay)
                attempt += 1

    async def _post(
        self,
        path: str,
        *,
        json_data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a POST request."""
        return await self._request(
            "POST",
            path,
            json_data=json_data,
            headers=headers,
        )
