"""Configuration management for Igor."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    # HTTP Configuration
    request_timeout_seconds: float = Field(default=10.0, description="Timeout for each outbound status request")
    user_agent: str = Field(default="igor-status/0.1", description="User agent sent to status pages")

    # Status Configuration
    base_trigger: str = Field(default="status", description="Trigger word handled by the status plugin")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "chat"] = Field(default="default", description="Log output profile")

    model_config = SettingsConfigDict(
        env_prefix="IGOR_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )


def get_settings() -> Settings:
    """Get application settings and configure logging from them.

    Returns:
        Settings instance
    """
    settings = Settings()

    configure_logging(profile=settings.log_profile, level=settings.log_level)

    return settings
