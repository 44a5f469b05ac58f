"""
Client configuration using Pydantic Settings.

This module loads configuration from environment variables and .env files,
providing type-safe, read-only access to all client settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via ``PIXVERSE_``-prefixed environment
    variables. Settings are loaded from .env file if present. Instances are
    frozen once constructed and are shared read-only by every client.

    Attributes:
        token: Auth token sent in the ``Token`` header
        headers: Extra headers merged into every control-plane call
        base_url: Control-plane API host
        web_origin: Origin and Referer presented to the API
        user_agent: Browser user agent sent to the control-plane
        oss_bucket: Object-storage bucket name
        oss_endpoint: Object-storage upload host
        oss_upload_prefix: Key prefix for uploaded objects
        oss_user_agent: Value of the ``x-oss-user-agent`` header
        max_retries: Retries after the first attempt
        retry_delay: Fixed delay in seconds between attempts
        timeout: Transport timeout in seconds
        log_level: Log level used by scripts
    """

    model_config = SettingsConfigDict(
        env_prefix="PIXVERSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    # Auth
    token: str | None = None
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers merged into every control-plane call",
    )

    # Control-plane
    base_url: str = "https://app-api.pixverse.ai"
    web_origin: str = "https://app.pixverse.ai"
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:136.0) "
        "Gecko/20100101 Firefox/136.0"
    )

    # Object storage
    oss_bucket: str = "pixverse-fe-upload"
    oss_endpoint: str = "https://pixverse-fe-upload.oss-accelerate.aliyuncs.com"
    oss_upload_prefix: str = "upload"
    oss_user_agent: str = "aliyun-sdk-js/6.22.0 Firefox 136.0 on OS X 10.15"

    # Transport
    max_retries: int = Field(default=3, ge=0)
    retry_delay: float = Field(default=1.0, ge=0)
    timeout: float = Field(default=60.0, gt=0)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once
    during the process lifecycle.

    Returns:
        Settings: Client settings instance
    """
    return Settings()
