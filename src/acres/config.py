"""Runtime configuration, read from ``ACRES_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from acres import __version__

DEFAULT_BASE_URI = "https://api.artic.edu/api/v1"
DEFAULT_CACHE_DIR = Path("~/.cache/acres")


class Settings(BaseSettings):
    """Client configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ACRES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_uri: str = DEFAULT_BASE_URI
    use_cache: bool = True
    cache_dir: Path = DEFAULT_CACHE_DIR
    timeout: float = 30.0
    user_agent: str = f"acres/{__version__}"
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
