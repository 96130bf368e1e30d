"""Application settings, read from the environment (``WHALE_TRACKER_*``) or ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the CLI and the web app."""

    model_config = SettingsConfigDict(
        env_prefix="WHALE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "iNaturalist Whale Tracker"
    app_env: str = "dev"
    debug: bool = False
    log_level: str = "INFO"

    # Local web server
    host: str = "127.0.0.1"
    api_port: int = Field(default=8000, ge=1, le=65535)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
