"""Core domain entities for groupie-tracker.

Pydantic v2 models for the four upstream datasets (artists, locations,
dates, relations) and for the assembled artist detail view.  All models use
frozen config: a snapshot is shared by every concurrent request and must
never be mutated in place.

Field names are snake_case in Python and camelCase on the wire, matching the
upstream JSON (``creationDate``, ``firstAlbum``, ``datesLocations``).
``populate_by_name`` lets tests and code build models with either spelling.

Key relationships:
    - Every record is keyed by the artist ``id``; that is the only join key.
    - The URL strings on Artist (``locations``, ``concertDates``,
      ``relations``) are opaque cross-references and are never followed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

_DIGITS = re.compile(r"[0-9]+")
_CONCERT_DATE_FORMAT = "%d-%m-%Y"


def parse_first_album_year(first_album: str) -> int | None:
    """Return the year of a ``DD-MM-YYYY`` first-album string, or ``None``.

    Only the third dash-separated field is inspected.  Anything that does
    not split into exactly three fields, or whose third field is not a plain
    run of digits, yields ``None`` so the caller can exclude the artist.
    """
    parts = first_album.split("-")
    if len(parts) != 3 or not _DIGITS.fullmatch(parts[2]):
        return None
    return int(parts[2])


def parse_concert_date(raw: str) -> date | None:
    """Parse an upstream concert date such as ``"*23-08-2019"``.

    The dates dataset prefixes some entries with ``*``; it carries no meaning
    for ordering and is stripped.
    """
    try:
        return datetime.strptime(raw.strip().lstrip("*"), _CONCERT_DATE_FORMAT).date()
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Upstream records
# ---------------------------------------------------------------------------

class Artist(BaseModel):
    """An artist or band as published by the artists source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    image: str = ""
    members: tuple[str, ...] = ()
    creation_date: int = Field(alias="creationDate")
    first_album: str = Field(default="", alias="firstAlbum")
    # Cross-reference URLs, kept only so API consumers see the full record.
    locations_url: str = Field(default="", alias="locations")
    concert_dates_url: str = Field(default="", alias="concertDates")
    relations_url: str = Field(default="", alias="relations")

    @property
    def first_album_year(self) -> int | None:
        return parse_first_album_year(self.first_album)


class LocationRecord(BaseModel):
    """Tour locations of one artist, e.g. ``"north_carolina-usa"``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    locations: tuple[str, ...] = ()
    dates_url: str = Field(default="", alias="dates")


class DateRecord(BaseModel):
    """Concert dates of one artist (``DD-MM-YYYY``, optionally ``*``-prefixed)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    dates: tuple[str, ...] = ()


class RelationRecord(BaseModel):
    """Mapping from location to the concert dates played there."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    dates_locations: Mapping[str, tuple[str, ...]] = Field(
        default_factory=dict, alias="datesLocations", validate_default=True
    )

    @field_validator("dates_locations")
    @classmethod
    def _read_only(cls, value: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
        # Snapshots are shared across requests; the mapping must not be editable.
        return MappingProxyType(dict(value))

    @field_serializer("dates_locations")
    def _dump_mapping(self, value: Mapping[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        return dict(value)


# ---------------------------------------------------------------------------
# Detail view
# ---------------------------------------------------------------------------

class GeoLocation(BaseModel):
    """A tour location resolved to coordinates by the geocoder."""

    model_config = ConfigDict(frozen=True)

    address: str
    lat: float
    lon: float


class ConcertEvent(BaseModel):
    """One concert: a location paired with a single date from the relations."""

    model_config = ConfigDict(frozen=True)

    location: str
    date: str


class ArtistDetail(BaseModel):
    """An artist joined with its locations, dates, relations and events.

    ``locations`` only contains addresses the geocoder resolved, in the
    order of the source location list.
    """

    model_config = ConfigDict(frozen=True)

    artist: Artist
    locations: list[GeoLocation] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    relations: dict[str, list[str]] = Field(default_factory=dict)
    events: list[ConcertEvent] = Field(default_factory=list)
