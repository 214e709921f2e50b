"""
Application configuration using Pydantic Settings.

All environment variables are accessed through this config object.
Never use os.getenv() directly in business logic.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Configuration
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:5173"],
        description="CORS allowed origins",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level",
    )

    # Upload Configuration
    MAX_UPLOAD_SIZE: int = Field(
        default=5242880,
        description="Maximum profile picture size in bytes (5MB, inclusive)",
    )
    ALLOWED_IMAGE_TYPES: List[str] = Field(
        default=["image/jpeg", "image/jpg", "image/png", "image/webp"],
        description="Declared content types accepted before signature checks",
    )
    RATE_LIMIT_REQUESTS: int = Field(
        default=10,
        description="Number of uploads allowed per window",
    )
    RATE_LIMIT_WINDOW: int = Field(
        default=3600,
        description="Rate limit time window in seconds",
    )

    # Storage Configuration
    STORAGE_PATH: str = Field(
        default="/tmp/memberhub",
        description="Root directory for user records and profile pictures",
    )
    PROFILE_PICTURE_BASE_PATH: str = Field(
        default="/api/upload/profile-picture/",
        description="URL prefix for serving profile pictures",
    )
    PROFILE_PICTURE_CACHE_SECONDS: int = Field(
        default=3600,
        description="Cache-Control max-age for served profile pictures",
    )

    # Cleanup Configuration
    CLEANUP_INTERVAL_HOURS: int = Field(
        default=1,
        description="Interval between storage sweeps in hours",
    )
    TEMP_FILE_TTL_MINUTES: int = Field(
        default=30,
        description="Age after which abandoned temp files are removed",
    )


# Global settings instance
settings = Settings()
