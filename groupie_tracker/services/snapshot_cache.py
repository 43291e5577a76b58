"""Time-windowed cache of the combined upstream snapshot.

The cache owns the only mutable shared state in the application: the
current :class:`Snapshot` and the moment it expires.  Both live in one
frozen ``_CacheEntry`` that is replaced by a single reference assignment,
so a reader that loads ``self._entry`` always sees a matching
snapshot/expiry pair and never a half-updated one.  The network fetch runs
entirely outside that swap.

Refresh semantics:
    - all four datasets are fetched concurrently and *all* fetches are
      awaited before success or failure is decided;
    - any failure fails the whole refresh, leaves the previous entry
      untouched and surfaces every collected error to the caller;
    - nothing is retried internally.

Single-flight: with ``single_flight=True`` (the default) callers that find
the snapshot expired while a refresh is already running await that same
refresh instead of starting their own.  They await it through
``asyncio.shield`` so a caller that gets cancelled (client disconnect)
stops waiting without cancelling the refresh other callers depend on.
With ``single_flight=False`` every such caller refreshes independently and
the last one to finish wins.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable

import structlog

from groupie_tracker.interfaces.tracker_data_provider import ITrackerDataProvider
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.utils.concurrency import gather_settled
from groupie_tracker.utils.errors import UpstreamFetchError
from groupie_tracker.utils.logging import get_logger

_DATASETS = ("artists", "locations", "dates", "relations")


@dataclass(frozen=True)
class _CacheEntry:
    snapshot: Snapshot
    expires_at: float


class SnapshotCache:
    """Serve a consistent snapshot, refreshing it when its window has passed.

    Parameters
    ----------
    provider:
        Source of the four datasets.
    ttl_seconds:
        How long a successfully fetched snapshot stays fresh.
    single_flight:
        Share one in-flight refresh between concurrent callers.
    clock:
        Monotonic time source in seconds; injectable for tests.
    """

    def __init__(
        self,
        provider: ITrackerDataProvider,
        ttl_seconds: float,
        *,
        single_flight: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._provider = provider
        self._ttl = ttl_seconds
        self._single_flight = single_flight
        self._clock = clock
        self._entry: _CacheEntry | None = None
        self._inflight: asyncio.Task[Snapshot] | None = None
        self._refresh_count = 0
        self._last_error: str | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def get(self, *, allow_stale: bool = False) -> Snapshot:
        """Return the current snapshot, refreshing it first if it has expired.

        Parameters
        ----------
        allow_stale:
            When the refresh fails and a previous snapshot exists, return
            that snapshot instead of raising.  A cold cache always raises.

        Raises
        ------
        UpstreamFetchError
            If a needed refresh fails (and no stale fallback applies).
        """
        entry = self._entry
        if entry is not None and self._clock() < entry.expires_at:
            return entry.snapshot

        try:
            if self._single_flight:
                return await self._join_refresh()
            return await self.refresh()
        except UpstreamFetchError as exc:
            stale = self._entry
            if allow_stale and stale is not None:
                self._logger.warning(
                    "serving_stale_snapshot",
                    fetched_at=stale.snapshot.fetched_at.isoformat(),
                    error=str(exc),
                )
                return stale.snapshot
            raise

    async def _join_refresh(self) -> Snapshot:
        task = self._inflight
        if task is None or task.done():
            task = asyncio.create_task(self.refresh())
            self._inflight = task
            task.add_done_callback(self._on_refresh_done)
        else:
            self._logger.debug("snapshot_refresh_joined")
        return await asyncio.shield(task)

    def _on_refresh_done(self, task: asyncio.Task[Snapshot]) -> None:
        if self._inflight is task:
            self._inflight = None
        # Mark the exception retrieved; every waiter may have been cancelled.
        if not task.cancelled():
            task.exception()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self) -> Snapshot:
        """Fetch all four datasets and, if every fetch succeeds, publish a new snapshot.

        Raises
        ------
        UpstreamFetchError
            If any fetch fails.  ``failures`` holds every collected error.
        """
        started = time.perf_counter()
        results, errors = await gather_settled(
            [
                self._provider.fetch_artists(),
                self._provider.fetch_locations(),
                self._provider.fetch_dates(),
                self._provider.fetch_relations(),
            ]
        )

        if errors:
            failed = [name for name, result in zip(_DATASETS, results) if result is None]
            self._last_error = "; ".join(str(err) for err in errors)
            self._logger.error(
                "snapshot_refresh_failed",
                provider=self._provider.get_provider_name(),
                failed_datasets=failed,
                errors=[str(err) for err in errors],
            )
            raise UpstreamFetchError(
                message=(
                    f"Snapshot refresh failed for {', '.join(failed)}: {self._last_error}"
                ),
                provider_name=self._provider.get_provider_name(),
                failures=errors,
            )

        artists, locations, dates, relations = results
        snapshot = Snapshot(
            artists=tuple(artists),
            locations=tuple(locations),
            dates=tuple(dates),
            relations=tuple(relations),
        )

        self._entry = _CacheEntry(snapshot=snapshot, expires_at=self._clock() + self._ttl)
        self._refresh_count += 1
        self._last_error = None

        if snapshot.duplicate_ids:
            self._logger.warning("snapshot_duplicate_ids", duplicates=snapshot.duplicate_ids)
        self._logger.info(
            "snapshot_refreshed",
            artists=len(snapshot.artists),
            locations=len(snapshot.locations),
            dates=len(snapshot.dates),
            relations=len(snapshot.relations),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return snapshot

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def current(self) -> Snapshot | None:
        """The last successfully fetched snapshot, fresh or not."""
        entry = self._entry
        return entry.snapshot if entry else None

    @property
    def expires_at(self) -> float | None:
        entry = self._entry
        return entry.expires_at if entry else None

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def is_fresh(self) -> bool:
        entry = self._entry
        return entry is not None and self._clock() < entry.expires_at
