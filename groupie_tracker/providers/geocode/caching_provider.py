"""Geocode provider decorator that memoises successful lookups.

Only hits are cached.  A miss may be transient (timeout, rate limit), so it
is retried on the next detail view rather than remembered.
"""

from __future__ import annotations

import structlog

from groupie_tracker.interfaces.cache_provider import ICacheProvider
from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.models.entities import GeoLocation

logger = structlog.get_logger(logger_name=__name__)

_KEY_PREFIX = "geocode:"


class CachingGeocodeProvider(IGeocodeProvider):
    """Wrap another :class:`IGeocodeProvider` with an :class:`ICacheProvider`."""

    def __init__(self, inner: IGeocodeProvider, cache: ICacheProvider) -> None:
        self._inner = inner
        self._cache = cache

    @staticmethod
    def _key(address: str) -> str:
        return f"{_KEY_PREFIX}{address.strip().lower()}"

    async def geocode(self, address: str) -> GeoLocation:
        key = self._key(address)
        cached = await self._cache.get(key)
        if cached is not None:
            # Keep the caller's spelling even if another spelling populated the entry.
            return GeoLocation(address=address, lat=cached.lat, lon=cached.lon)

        location = await self._inner.geocode(address)
        await self._cache.set(key, location)
        return location

    def get_provider_name(self) -> str:
        return f"cached:{self._inner.get_provider_name()}"

    def is_available(self) -> bool:
        return self._inner.is_available()
