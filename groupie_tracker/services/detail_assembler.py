"""Assemble the detail view of one artist from a snapshot.

Joins the artist with its locations, dates and relations records (by id;
a missing record yields an empty list or mapping) and geocodes each tour
location.  Geocoding runs concurrently under a shared semaphore; addresses
the geocoder cannot resolve are dropped and the rest keep their source
order.  An unknown id (``0`` is never valid) returns ``None``.
"""

from __future__ import annotations

import asyncio
from datetime import date

import structlog

from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.models.entities import (
    ArtistDetail,
    ConcertEvent,
    GeoLocation,
    parse_concert_date,
)
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.services.snapshot_cache import SnapshotCache
from groupie_tracker.utils.concurrency import throttled_gather
from groupie_tracker.utils.errors import GeocodeMissError
from groupie_tracker.utils.logging import get_logger


def build_events(relations: dict[str, list[str]]) -> list[ConcertEvent]:
    """Flatten ``{location: [dates]}`` into chronologically sorted concerts.

    Dates that do not parse as ``DD-MM-YYYY`` go last, in source order.
    """
    events = [
        ConcertEvent(location=location, date=concert_date)
        for location, dates in relations.items()
        for concert_date in dates
    ]

    def _key(event: ConcertEvent) -> tuple[bool, date]:
        parsed = parse_concert_date(event.date)
        return parsed is None, parsed or date.min

    return sorted(events, key=_key)


class DetailAssembler:
    """Build :class:`ArtistDetail` views.

    Parameters
    ----------
    cache:
        Source of the current snapshot for :meth:`assemble_artist`.
    geocoder:
        Resolves tour locations; ``None`` means geocoding is not
        configured and details carry no coordinates.
    concurrency:
        Maximum geocode lookups in flight across all requests.
    allow_stale:
        Serve the last good snapshot when a refresh fails.
    """

    def __init__(
        self,
        cache: SnapshotCache,
        geocoder: IGeocodeProvider | None,
        *,
        concurrency: int = 5,
        allow_stale: bool = True,
    ) -> None:
        self._cache = cache
        self._geocoder = geocoder
        self._semaphore = asyncio.Semaphore(concurrency)
        self._allow_stale = allow_stale
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def assemble_artist(self, artist_id: int) -> ArtistDetail | None:
        """Fetch the current snapshot and assemble *artist_id* from it."""
        snapshot = await self._cache.get(allow_stale=self._allow_stale)
        return await self.assemble(snapshot, artist_id)

    async def assemble(self, snapshot: Snapshot, artist_id: int) -> ArtistDetail | None:
        """Return the detail view for *artist_id*, or ``None`` if there is no such artist."""
        if artist_id == 0:
            return None
        artist = snapshot.artist_by_id(artist_id)
        if artist is None:
            return None

        relations = snapshot.relations_for(artist_id)
        geolocations = await self._resolve_locations(snapshot.locations_for(artist_id))

        return ArtistDetail(
            artist=artist,
            locations=geolocations,
            dates=list(snapshot.dates_for(artist_id)),
            relations=relations,
            events=build_events(relations),
        )

    async def _resolve_locations(self, addresses: tuple[str, ...]) -> list[GeoLocation]:
        if self._geocoder is None or not addresses:
            return []

        outcomes = await throttled_gather(
            [self._geocoder.geocode(address) for address in addresses],
            semaphore=self._semaphore,
        )

        resolved: list[GeoLocation] = []
        misses: list[str] = []
        for address, outcome in zip(addresses, outcomes):
            if isinstance(outcome, GeocodeMissError):
                misses.append(address)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                resolved.append(outcome)

        if misses:
            self._logger.info("geocode_miss", addresses=misses, resolved=len(resolved))
        return resolved
