"""groupie-tracker domain models -- re-exports all public model classes.

    - entities.py -- upstream records (Artist, LocationRecord, ...) and the
                     assembled ArtistDetail view
    - snapshot.py -- the immutable bundle of all four datasets
    - search.py   -- filter parameters and suggestions
"""

from __future__ import annotations

from groupie_tracker.models.entities import (
    Artist,
    ArtistDetail,
    ConcertEvent,
    DateRecord,
    GeoLocation,
    LocationRecord,
    RelationRecord,
    parse_concert_date,
    parse_first_album_year,
)
from groupie_tracker.models.search import (
    FilterParams,
    FilterRequest,
    Suggestion,
    SuggestionCategory,
)
from groupie_tracker.models.snapshot import Snapshot

__all__ = [
    # entities
    "Artist",
    "ArtistDetail",
    "ConcertEvent",
    "DateRecord",
    "GeoLocation",
    "LocationRecord",
    "RelationRecord",
    "parse_concert_date",
    "parse_first_album_year",
    # search
    "FilterParams",
    "FilterRequest",
    "Suggestion",
    "SuggestionCategory",
    # snapshot
    "Snapshot",
]
