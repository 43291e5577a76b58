"""The immutable, atomically published bundle of the four upstream datasets.

A :class:`Snapshot` is built once per successful refresh and then only
read.  The next refresh supersedes it with a new object; readers that still
hold the old one keep a consistent view until they drop it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from groupie_tracker.models.entities import (
    Artist,
    DateRecord,
    LocationRecord,
    RelationRecord,
)


class Snapshot(BaseModel):
    """artists + locations + dates + relations, fetched as one unit.

    Id-indexed lookups are built once in ``model_post_init``.  When a
    dataset repeats an id the first record wins; the repeated ids are kept
    in :attr:`duplicate_ids` so the cache can report them.
    """

    model_config = ConfigDict(frozen=True)

    artists: tuple[Artist, ...] = ()
    locations: tuple[LocationRecord, ...] = ()
    dates: tuple[DateRecord, ...] = ()
    relations: tuple[RelationRecord, ...] = ()
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    _artists_by_id: dict[int, Artist] = PrivateAttr(default_factory=dict)
    _locations_by_id: dict[int, LocationRecord] = PrivateAttr(default_factory=dict)
    _dates_by_id: dict[int, DateRecord] = PrivateAttr(default_factory=dict)
    _relations_by_id: dict[int, RelationRecord] = PrivateAttr(default_factory=dict)
    _duplicate_ids: dict[str, list[int]] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for name, records, index in (
            ("artists", self.artists, self._artists_by_id),
            ("locations", self.locations, self._locations_by_id),
            ("dates", self.dates, self._dates_by_id),
            ("relations", self.relations, self._relations_by_id),
        ):
            for record in records:
                if record.id in index:
                    self._duplicate_ids.setdefault(name, []).append(record.id)
                    continue
                index[record.id] = record

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def artist_by_id(self, artist_id: int) -> Artist | None:
        return self._artists_by_id.get(artist_id)

    def locations_for(self, artist_id: int) -> tuple[str, ...]:
        """Return the artist's tour locations, empty if it has no record."""
        record = self._locations_by_id.get(artist_id)
        return record.locations if record else ()

    def dates_for(self, artist_id: int) -> tuple[str, ...]:
        record = self._dates_by_id.get(artist_id)
        return record.dates if record else ()

    def relations_for(self, artist_id: int) -> dict[str, list[str]]:
        """Return a fresh ``{location: [dates]}`` dict for the artist."""
        record = self._relations_by_id.get(artist_id)
        if record is None:
            return {}
        return {location: list(dates) for location, dates in record.dates_locations.items()}

    @property
    def duplicate_ids(self) -> dict[str, list[int]]:
        return {name: list(ids) for name, ids in self._duplicate_ids.items()}

    @property
    def artist_count(self) -> int:
        return len(self.artists)
