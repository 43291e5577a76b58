"""Shared pytest fixtures for the groupie-tracker test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.interfaces.tracker_data_provider import ITrackerDataProvider
from groupie_tracker.models.entities import (
    Artist,
    DateRecord,
    GeoLocation,
    LocationRecord,
    RelationRecord,
)
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.utils.errors import GeocodeMissError

_API = "https://groupietrackers.herokuapp.com/api"


# ---------------------------------------------------------------------------
# Upstream payloads (camelCase, as served by the API)
# ---------------------------------------------------------------------------


def _artist_payload(
    artist_id: int, name: str, members: list[str], creation: int, first_album: str
) -> dict:
    return {
        "id": artist_id,
        "image": f"{_API}/images/{artist_id}.jpeg",
        "name": name,
        "members": members,
        "creationDate": creation,
        "firstAlbum": first_album,
        "locations": f"{_API}/locations/{artist_id}",
        "concertDates": f"{_API}/dates/{artist_id}",
        "relations": f"{_API}/relation/{artist_id}",
    }


@pytest.fixture
def artist_payloads() -> list[dict]:
    """Five artists covering the interesting filter cases.

    ``The 1990 Project`` has an unparsable first-album date, so it is never
    admitted by any filter.
    """
    return [
        _artist_payload(
            1,
            "Queen",
            ["Freddie Mercury", "Brian May", "John Deacon", "Roger Taylor"],
            1970,
            "14-12-1973",
        ),
        _artist_payload(
            2, "SOJA", ["Jacob Hemphill", "Bob Jefferson", "Ryan Berty"], 1997, "05-06-2002"
        ),
        _artist_payload(
            3,
            "Pink Floyd",
            ["Syd Barrett", "David Gilmour", "Roger Waters", "Richard Wright", "Nick Mason"],
            1965,
            "05-08-1967",
        ),
        _artist_payload(4, "The 1990 Project", ["Alex Moss"], 1990, "1990"),
        _artist_payload(5, "Nineties Band", ["Max Power", "Lee Year"], 1990, "01-01-1992"),
    ]


@pytest.fixture
def sample_artists(artist_payloads: list[dict]) -> list[Artist]:
    return [Artist.model_validate(payload) for payload in artist_payloads]


@pytest.fixture
def sample_locations() -> list[LocationRecord]:
    return [
        LocationRecord(
            id=1, locations=("london-uk", "osaka-japan", "los_angeles-usa", "saitama-japan")
        ),
        LocationRecord(
            id=2, locations=("playa_del_carmen-mexico", "papeete-french_polynesia")
        ),
        LocationRecord(id=3, locations=("london-uk", "berlin-germany")),
        LocationRecord(id=4, locations=("paris-france",)),
        LocationRecord(id=5, locations=("berlin-germany",)),
    ]


@pytest.fixture
def sample_dates() -> list[DateRecord]:
    return [
        DateRecord(id=1, dates=("*23-08-2019", "22-08-2019", "20-08-2019")),
        DateRecord(id=2, dates=("*05-12-2019", "06-12-2019")),
        DateRecord(id=3, dates=("*01-06-1972",)),
    ]


@pytest.fixture
def sample_relations() -> list[RelationRecord]:
    return [
        RelationRecord(
            id=1,
            dates_locations={
                "london-uk": ("23-08-2019",),
                "osaka-japan": ("22-08-2019", "20-08-2019"),
            },
        ),
        RelationRecord(
            id=2,
            dates_locations={
                "playa_del_carmen-mexico": ("05-12-2019",),
                "papeete-french_polynesia": ("06-12-2019",),
            },
        ),
    ]


@pytest.fixture
def sample_snapshot(
    sample_artists: list[Artist],
    sample_locations: list[LocationRecord],
    sample_dates: list[DateRecord],
    sample_relations: list[RelationRecord],
) -> Snapshot:
    return Snapshot(
        artists=tuple(sample_artists),
        locations=tuple(sample_locations),
        dates=tuple(sample_dates),
        relations=tuple(sample_relations),
    )


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_data_provider(
    sample_artists: list[Artist],
    sample_locations: list[LocationRecord],
    sample_dates: list[DateRecord],
    sample_relations: list[RelationRecord],
) -> MagicMock:
    """An ITrackerDataProvider whose four fetches succeed with the sample data."""
    provider = MagicMock(spec=ITrackerDataProvider)
    provider.fetch_artists = AsyncMock(return_value=sample_artists)
    provider.fetch_locations = AsyncMock(return_value=sample_locations)
    provider.fetch_dates = AsyncMock(return_value=sample_dates)
    provider.fetch_relations = AsyncMock(return_value=sample_relations)
    provider.get_provider_name.return_value = "fake_upstream"
    return provider


_KNOWN_PLACES = {
    "london-uk": (51.5072, -0.1276),
    "osaka-japan": (34.6937, 135.5023),
    "saitama-japan": (35.8617, 139.6455),
    "berlin-germany": (52.5200, 13.4050),
    "playa_del_carmen-mexico": (20.6296, -87.0739),
}


@pytest.fixture
def mock_geocoder() -> MagicMock:
    """An IGeocodeProvider that knows a handful of places and misses the rest."""

    async def _geocode(address: str) -> GeoLocation:
        if address not in _KNOWN_PLACES:
            raise GeocodeMissError(message=f"no match for {address}", provider_name="fake")
        lat, lon = _KNOWN_PLACES[address]
        return GeoLocation(address=address, lat=lat, lon=lon)

    geocoder = MagicMock(spec=IGeocodeProvider)
    geocoder.geocode = AsyncMock(side_effect=_geocode)
    geocoder.get_provider_name.return_value = "fake_geocoder"
    geocoder.is_available.return_value = True
    return geocoder


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
