"""Mapbox forward-geocoding provider.

Issues one ``GET {base}/{address}.json?access_token=...`` per address and
reads the first feature's ``center`` (``[longitude, latitude]``).  Every way
a lookup can go wrong is reported as ``GeocodeMissError``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from groupie_tracker.config.settings import Settings
from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.models.entities import GeoLocation
from groupie_tracker.utils.errors import ConfigurationError, GeocodeMissError

logger = structlog.get_logger(logger_name=__name__)


class MapboxGeocodeProvider(IGeocodeProvider):
    """Geocoder backed by the Mapbox Places API.

    Raises ``ConfigurationError`` at construction when no access token is
    configured, so a misconfigured deployment fails at startup rather than
    silently dropping every location.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        if not settings.mapbox_access_token:
            raise ConfigurationError(
                message="MAPBOX_ACCESS_TOKEN is not set",
                provider_name=self.get_provider_name(),
            )
        self._base_url = settings.mapbox_geocoding_url.rstrip("/")
        self._token = settings.mapbox_access_token
        self._timeout = httpx.Timeout(settings.geocode_timeout_seconds)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self._timeout)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _miss(self, address: str, reason: str) -> GeocodeMissError:
        return GeocodeMissError(
            message=f"Could not geocode '{address}': {reason}",
            provider_name=self.get_provider_name(),
        )

    @staticmethod
    def _extract_center(payload: Any) -> tuple[float, float] | None:
        """Return ``(lon, lat)`` of the first feature, or ``None``."""
        if not isinstance(payload, dict):
            return None
        features = payload.get("features")
        if not isinstance(features, list) or not features:
            return None
        center = features[0].get("center") if isinstance(features[0], dict) else None
        if not isinstance(center, list) or len(center) != 2:
            return None
        try:
            return float(center[0]), float(center[1])
        except (TypeError, ValueError):
            return None

    # ------------------------------------------------------------------
    # IGeocodeProvider implementation
    # ------------------------------------------------------------------

    async def geocode(self, address: str) -> GeoLocation:
        url = f"{self._base_url}/{quote(address, safe='')}.json"
        try:
            response = await self._client.get(
                url,
                params={"access_token": self._token},
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise self._miss(address, f"{type(exc).__name__}: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise self._miss(address, f"status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise self._miss(address, "unparsable response") from exc

        center = self._extract_center(payload)
        if center is None:
            raise self._miss(address, "no matching feature")

        lon, lat = center
        logger.debug("mapbox_geocoded", address=address, lat=lat, lon=lon)
        return GeoLocation(address=address, lat=lat, lon=lon)

    def get_provider_name(self) -> str:
        return "mapbox"

    def is_available(self) -> bool:
        return bool(self._token)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
