"""Cache providers.

MemoryCacheProvider keeps resolved geocodes for a day so repeated detail
views of the same artist, and locations shared between artists, skip the
Mapbox round trip.  It is not shared across processes; swap in another
ICacheProvider for multi-worker deployments.
"""

from groupie_tracker.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
