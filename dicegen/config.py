"""Application configuration using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Settings loaded from DICEGEN_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="DICEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upper bounds checked before any die is drawn
    max_dice: int = Field(default=10_000, gt=0)
    max_sides: int = Field(default=1_000_000, gt=0)

    log_level: LogLevel = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the dicegen logger hierarchy."""
    settings = settings or get_settings()
    logging.getLogger("dicegen").setLevel(settings.log_level)
