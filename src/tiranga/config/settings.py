"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
The window is a fixed 800x600 and the animation itself is not
configurable; only the frame rate and diagnostics are.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TIRANGA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_file: Optional[Path] = None

    # 40 ticks per second, one every 25ms
    fps: int = Field(default=40, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
