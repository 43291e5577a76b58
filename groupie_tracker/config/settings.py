"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. **Environment variables** -- e.g. ``MAPBOX_ACCESS_TOKEN=pk.abc``
  2. **.env file** -- key=value lines in the project root ``.env`` file

Field ``cache_ttl_seconds`` maps to env var ``CACHE_TTL_SECONDS`` and so on.
Defaults apply when neither source sets a field.  The ``.env`` file is never
committed; the Mapbox token in particular must come from the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_UPSTREAM_BASE = "https://groupietrackers.herokuapp.com/api"


class Settings(BaseSettings):
    """groupie-tracker application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream data sources ===
    artists_url: str = f"{_UPSTREAM_BASE}/artists"
    locations_url: str = f"{_UPSTREAM_BASE}/locations"
    dates_url: str = f"{_UPSTREAM_BASE}/dates"
    relations_url: str = f"{_UPSTREAM_BASE}/relation"
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # === Snapshot cache ===
    cache_ttl_seconds: float = Field(default=3600.0, gt=0)
    # Concurrent callers that see an expired snapshot share one refresh.
    # False restores independent refreshes (last writer wins).
    cache_single_flight: bool = True
    # Keep answering from the last good snapshot while refreshes fail.
    serve_stale_on_error: bool = True

    # === Geocoding (Mapbox) ===
    # Empty string = "not configured" -> detail pages carry no coordinates.
    mapbox_access_token: str = ""
    mapbox_geocoding_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    geocode_timeout_seconds: float = Field(default=10.0, gt=0)
    geocode_concurrency: int = Field(default=5, ge=1)
    geocode_cache_size: int = Field(default=2048, ge=1)
    geocode_cache_ttl_seconds: int = Field(default=86400, ge=1)

    # === Query engine ===
    suggestion_limit: int = Field(default=20, ge=1)

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def geocoding_enabled(self) -> bool:
        return bool(self.mapbox_access_token)
