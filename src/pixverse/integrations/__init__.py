"""
External API client integrations.

This module provides clients for the Pixverse services:
- Control-plane: upload tokens, media registration, video jobs
- Data-plane: signed uploads to Aliyun OSS

All control-plane calls follow the same pattern:
- Fixed-delay retry with a pluggable policy
- Envelope error checking
- Structured logging
"""

# Base client classes and retry policies
from pixverse.integrations.base_client import (
    BaseHTTPClient,
    RetryPolicy,
    retry_all,
    retry_transient,
)

# Object storage
from pixverse.integrations.oss_client import OSSUploader

# Pixverse API
from pixverse.integrations.pixverse_client import (
    PixverseClient,
    get_pixverse_client,
)

__all__ = [
    # Base client
    "BaseHTTPClient",
    "RetryPolicy",
    "retry_all",
    "retry_transient",
    # Object storage
    "OSSUploader",
    # Pixverse
    "PixverseClient",
    "get_pixverse_client",
]
