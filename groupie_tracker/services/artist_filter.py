"""Artist filtering and free-text search over a snapshot.

Pure functions: nothing here touches the network or mutates the snapshot.

An artist is returned by :func:`filter_artists` when it first passes the
*admission test* (every structured filter) and then matches the query:

    admission   creation year in range, first-album year in range (an
                unparsable first-album date excludes the artist), member
                count accepted, some tour location contains some filter
                location (case-insensitive)
    query       empty -> match; a lone 4-digit token -> exact creation
                year; otherwise every token must occur in the name, a
                member, the first-album string or a tour location (each
                token may hit a different field)
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

from groupie_tracker.models.entities import Artist
from groupie_tracker.models.search import FilterParams, FilterRequest
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.utils.errors import InvalidFilterRangeError

_YEAR_QUERY = re.compile(r"[0-9]{4}")


def tokenize(query: str) -> list[str]:
    """Lower-case *query* and split it on whitespace."""
    return query.lower().split()


def contains_all(text: str, tokens: Iterable[str]) -> bool:
    """Return ``True`` if every (already lower-cased) token occurs in *text*."""
    haystack = text.lower()
    return all(token in haystack for token in tokens)


def year_query(tokens: list[str]) -> int | None:
    """Return the year if *tokens* is a single 4-digit number, else ``None``."""
    if len(tokens) == 1 and _YEAR_QUERY.fullmatch(tokens[0]):
        return int(tokens[0])
    return None


# ---------------------------------------------------------------------------
# Defaults and validation
# ---------------------------------------------------------------------------

def _current_year() -> int:
    return datetime.now().year


def default_filter_params(snapshot: Snapshot, current_year: int | None = None) -> FilterParams:
    """Build the widest filter the data supports.

    Minima are the earliest creation year and the earliest parsable
    first-album year observed in *snapshot* (never later than the current
    year); both maxima are the current year.
    """
    year = current_year if current_year is not None else _current_year()
    creation_min = min((artist.creation_date for artist in snapshot.artists), default=year)
    album_years = [
        artist.first_album_year
        for artist in snapshot.artists
        if artist.first_album_year is not None
    ]
    return FilterParams(
        creation_year_min=min(creation_min, year),
        creation_year_max=year,
        first_album_year_min=min(min(album_years, default=year), year),
        first_album_year_max=year,
    )


def validate_filter_params(params: FilterParams) -> None:
    """Reject impossible filters before any artist is examined.

    Raises
    ------
    InvalidFilterRangeError
        On ``min > max`` in either year range, a member count below 1, or
        a location that is blank after trimming.  Ranges are never swapped.
    """
    if params.creation_year_min > params.creation_year_max:
        raise InvalidFilterRangeError(
            f"invalid creation year range: min ({params.creation_year_min}) "
            f"> max ({params.creation_year_max})"
        )
    if params.first_album_year_min > params.first_album_year_max:
        raise InvalidFilterRangeError(
            f"invalid first album year range: min ({params.first_album_year_min}) "
            f"> max ({params.first_album_year_max})"
        )
    for count in sorted(params.members):
        if count < 1:
            raise InvalidFilterRangeError(
                f"invalid member count: {count} (must be positive)"
            )
    for location in params.locations:
        if not location.strip():
            raise InvalidFilterRangeError("empty location not allowed")


def resolve_filter_params(
    snapshot: Snapshot,
    request: FilterRequest | None = None,
    current_year: int | None = None,
) -> FilterParams:
    """Turn a client :class:`FilterRequest` into validated :class:`FilterParams`.

    Omitted fields take the data-driven defaults.  Minima below the observed
    data minimum are raised to it and maxima past the current year are
    lowered to it; an inverted range is then an error, not swapped.
    """
    defaults = default_filter_params(snapshot, current_year)
    request = request or FilterRequest()

    def _bounded(
        value: int | None, default: int, *, floor: int | None = None, ceiling: int | None = None
    ) -> int:
        if value is None:
            return default
        if floor is not None and value < floor:
            return floor
        if ceiling is not None and value > ceiling:
            return ceiling
        return value

    locations = [location.strip() for location in request.locations or []]
    if any(not location for location in locations):
        raise InvalidFilterRangeError("empty location not allowed")

    params = FilterParams(
        creation_year_min=_bounded(
            request.creation_year_min, defaults.creation_year_min, floor=defaults.creation_year_min
        ),
        creation_year_max=_bounded(
            request.creation_year_max, defaults.creation_year_max, ceiling=defaults.creation_year_max
        ),
        first_album_year_min=_bounded(
            request.first_album_year_min,
            defaults.first_album_year_min,
            floor=defaults.first_album_year_min,
        ),
        first_album_year_max=_bounded(
            request.first_album_year_max,
            defaults.first_album_year_max,
            ceiling=defaults.first_album_year_max,
        ),
        members=frozenset(request.members or ()),
        locations=frozenset(locations),
    )
    validate_filter_params(params)
    return params


# ---------------------------------------------------------------------------
# Admission and matching
# ---------------------------------------------------------------------------

def admits(artist: Artist, locations: tuple[str, ...], params: FilterParams) -> bool:
    """Apply the structured filters to one artist."""
    if not params.creation_year_min <= artist.creation_date <= params.creation_year_max:
        return False

    album_year = artist.first_album_year
    if album_year is None or not (
        params.first_album_year_min <= album_year <= params.first_album_year_max
    ):
        return False

    if params.members and len(artist.members) not in params.members:
        return False

    if params.locations:
        wanted = [location.lower() for location in params.locations]
        if not any(
            needle in location.strip().lower() for location in locations for needle in wanted
        ):
            return False

    return True


def matches_query(artist: Artist, locations: tuple[str, ...], tokens: list[str]) -> bool:
    """AND across tokens, OR across fields per token."""
    fields = [artist.name, *artist.members, artist.first_album, *locations]
    lowered = [field.lower() for field in fields]
    return all(any(token in field for field in lowered) for token in tokens)


def filter_artists(snapshot: Snapshot, query: str, params: FilterParams) -> list[Artist]:
    """Return the artists admitted by *params* and matching *query*, in snapshot order.

    Raises
    ------
    InvalidFilterRangeError
        If *params* fails validation; no artist is examined in that case.
    """
    validate_filter_params(params)

    tokens = tokenize(query)
    year = year_query(tokens)

    results: list[Artist] = []
    for artist in snapshot.artists:
        locations = snapshot.locations_for(artist.id)
        if not admits(artist, locations, params):
            continue
        if not tokens:
            results.append(artist)
        elif year is not None:
            if artist.creation_date == year:
                results.append(artist)
        elif matches_query(artist, locations, tokens):
            results.append(artist)
    return results
