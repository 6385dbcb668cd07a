"""
Application settings using Pydantic.

Provides environment-based configuration loading with SERVICELINK_ prefix.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SERVICELINK_",
        extra="ignore",
    )

    # Matching
    default_threshold: float = Field(default=80.0, ge=0, le=100)
    use_advanced_normalization: bool = False

    # Logging
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
