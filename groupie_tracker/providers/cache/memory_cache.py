"""In-memory cache provider using cachetools.TTLCache.

Holds resolved geocodes for a single process.  Entries share one TTL set at
construction; ``stats()`` exposes hit/miss counters so the app can report
how much Mapbox traffic the cache saved.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import structlog
from cachetools import TTLCache

from groupie_tracker.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries; the least recently used is evicted first.
    ttl:
        Seconds an entry stays valid.
    timer:
        Clock used for expiry; injectable for tests.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: float = 3600,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl, timer=timer)
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Any | None:
        value = self._cache.get(key)
        if value is None:
            self._misses += 1
            logger.debug("cache_miss", key=key)
        else:
            self._hits += 1
            logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        self._cache[key] = value
        logger.debug("cache_set", key=key, size=len(self._cache))

    def stats(self) -> dict[str, int]:
        """Return ``{"size", "max_size", "hits", "misses"}`` for log output."""
        return {
            "size": len(self._cache),
            "max_size": int(self._cache.maxsize),
            "hits": self._hits,
            "misses": self._misses,
        }
