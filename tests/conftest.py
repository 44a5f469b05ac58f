"""
Pytest configuration and fixtures for the Pixverse client tests.

Provides settings, a recording mock transport and a client factory so
tests never touch the network.
"""

import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

# Keep the environment from leaking into settings before importing the package
for _name in list(os.environ):
    if _name.startswith("PIXVERSE_"):
        del os.environ[_name]

from pixverse.core.config import Settings
from pixverse.integrations.pixverse_client import PixverseClient

Handler = Callable[[httpx.Request], httpx.Response]


def envelope(resp: Any = None, code: int = 0, message: str = "Success") -> dict[str, Any]:
    """Build a control-plane response envelope."""
    return {"ErrCode": code, "ErrMsg": message, "Resp": resp}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture
def settings() -> Settings:
    """Settings with no delay between retries."""
    return Settings(token="test-token", retry_delay=0)


@pytest.fixture
def make_client(
    settings: Settings,
) -> Callable[..., tuple[PixverseClient, RecordingTransport]]:
    """
    Provide a factory building a client over a recording mock transport.

    Usage: ``client, transport = make_client(handler, max_retries=0)``
    """

    def _make(handler: Handler, **kwargs: Any) -> tuple[PixverseClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        http_client = httpx.AsyncClient(transport=transport)
        kwargs.setdefault("settings", settings)
        return PixverseClient(client=http_client, **kwargs), transport

    return _make


@pytest.fixture
def upload_token_response() -> dict[str, Any]:
    """Sample upload-token envelope."""
    return envelope({"Ak": "STS.access-key", "Sk": "secret-key", "Token": "sts-token"})
