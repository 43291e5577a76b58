"""Caller-facing query surface bound to the snapshot cache.

Each call reads the current snapshot once and runs the pure query
functions against it, so a single request never mixes data from two
snapshots even if a refresh lands mid-request.
"""

from __future__ import annotations

from groupie_tracker.models.entities import Artist
from groupie_tracker.models.search import FilterParams, FilterRequest, Suggestion
from groupie_tracker.services.artist_filter import (
    default_filter_params,
    filter_artists,
    resolve_filter_params,
)
from groupie_tracker.services.snapshot_cache import SnapshotCache
from groupie_tracker.services.suggestion_service import suggest


class QueryEngine:
    """Filter, search and suggest against whatever snapshot the cache serves.

    Parameters
    ----------
    cache:
        The shared snapshot cache.
    allow_stale:
        Serve the last good snapshot when a refresh fails.
    """

    def __init__(self, cache: SnapshotCache, *, allow_stale: bool = True) -> None:
        self._cache = cache
        self._allow_stale = allow_stale

    async def filter(
        self,
        query: str = "",
        request: FilterRequest | FilterParams | None = None,
        current_year: int | None = None,
    ) -> list[Artist]:
        """Return artists passing the filter and matching *query*.

        A :class:`FilterRequest` (or ``None``) is resolved against the data
        first; ready :class:`FilterParams` are only validated.

        Raises
        ------
        InvalidFilterRangeError
            If the filter is rejected.
        UpstreamFetchError
            If the snapshot could not be refreshed.
        """
        snapshot = await self._cache.get(allow_stale=self._allow_stale)
        if isinstance(request, FilterParams):
            params = request
        else:
            params = resolve_filter_params(snapshot, request, current_year)
        return filter_artists(snapshot, query, params)

    async def suggest(self, query: str, limit: int | None = None) -> list[Suggestion]:
        if not query.strip():
            return []
        snapshot = await self._cache.get(allow_stale=self._allow_stale)
        return suggest(snapshot, query, limit=limit)

    async def filter_defaults(self, current_year: int | None = None) -> FilterParams:
        """Return the widest filter supported by the current snapshot."""
        snapshot = await self._cache.get(allow_stale=self._allow_stale)
        return default_filter_params(snapshot, current_year)
