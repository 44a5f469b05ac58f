"""
Pixverse Core Module.

This module contains the foundational components of the client:
- Configuration management
- Custom exceptions
"""

from pixverse.core.config import Settings, get_settings
from pixverse.core.exceptions import (
    APIError,
    ExternalServiceError,
    PixverseException,
    UploadError,
    ValidationError,
)

__all__ = [
    "Settings",
    "get_settings",
    "PixverseException",
    "ValidationError",
    "ExternalServiceError",
    "APIError",
    "UploadError",
]
