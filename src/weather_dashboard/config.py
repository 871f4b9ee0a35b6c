"""
Application settings.

Values come from environment variables prefixed with ``WEATHER_DASHBOARD_``
(or a local ``.env`` file), e.g. ``WEATHER_DASHBOARD_LAT=48.85``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATE_FILE = Path.home() / ".config" / "weather-dashboard" / "storage.json"


class Settings(BaseSettings):
    """Runtime configuration with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_DASHBOARD_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "weather-dashboard"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "WARNING"

    # Key-value persistence slot file and its size limit (mirrors browser local storage)
    state_file: Path = DEFAULT_STATE_FILE
    storage_quota_bytes: int = 5 * 1024 * 1024

    # Static site output + local preview server
    site_dir: Path = Path("site")
    api_port: int = 8000

    # Geocoding suggestions per search
    search_limit: int = Field(default=7, ge=1, le=100)

    # Autocomplete timing (milliseconds)
    debounce_ms: int = 300
    blur_grace_ms: int = 150

    # Device position; leave unset when no geolocation capability is available
    lat: float | None = Field(default=None, ge=-90, le=90)
    lon: float | None = Field(default=None, ge=-180, le=180)
    geolocation_timeout_ms: int = 10_000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()
