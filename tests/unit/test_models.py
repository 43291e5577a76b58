"""Unit tests for domain models, the snapshot index and date parsing."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from groupie_tracker.models.entities import (
    Artist,
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


# ======================================================================
# Date parsing
# ======================================================================


class TestParseFirstAlbumYear:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("14-12-1973", 1973),
            ("01-01-0999", 999),
            ("1990", None),
            ("", None),
            ("14-12-73a", None),
            ("14-12-", None),
            ("14/12/1973", None),
            ("01-02-03-2004", None),
            ("14-12-１９７３", None),
        ],
    )
    def test_parse(self, raw: str, expected: int | None) -> None:
        assert parse_first_album_year(raw) == expected


class TestParseConcertDate:
    def test_star_marker_is_stripped(self) -> None:
        assert parse_concert_date("*23-08-2019") == date(2019, 8, 23)

    def test_plain_date(self) -> None:
        assert parse_concert_date("05-12-2019") == date(2019, 12, 5)

    @pytest.mark.parametrize("raw", ["", "2019-08-23", "32-01-2019", "soon"])
    def test_unparsable(self, raw: str) -> None:
        assert parse_concert_date(raw) is None


# ======================================================================
# Entities
# ======================================================================


class TestArtist:
    def test_validates_upstream_payload(self, artist_payloads: list[dict]) -> None:
        artist = Artist.model_validate(artist_payloads[0])

        assert artist.creation_date == 1970
        assert artist.first_album_year == 1973
        assert artist.members == ("Freddie Mercury", "Brian May", "John Deacon", "Roger Taylor")
        assert artist.locations_url.endswith("/locations/1")

    def test_serialises_with_upstream_names(self, artist_payloads: list[dict]) -> None:
        artist = Artist.model_validate(artist_payloads[0])
        assert artist.model_dump(mode="json", by_alias=True) == artist_payloads[0]

    def test_is_frozen(self, sample_artists: list[Artist]) -> None:
        with pytest.raises(ValidationError):
            sample_artists[0].name = "King"

    def test_unparsable_first_album_year(self, sample_artists: list[Artist]) -> None:
        assert sample_artists[3].first_album_year is None


class TestRelationRecord:
    def test_validates_upstream_payload(self) -> None:
        record = RelationRecord.model_validate(
            {"id": 7, "datesLocations": {"osaka-japan": ["28-01-2020", "29-01-2020"]}}
        )
        assert record.dates_locations == {"osaka-japan": ("28-01-2020", "29-01-2020")}

    def test_mapping_is_read_only(self) -> None:
        record = RelationRecord(id=7, dates_locations={"osaka-japan": ("28-01-2020",)})
        with pytest.raises(TypeError):
            record.dates_locations["injected"] = ("01-01-2000",)
        assert dict(record.dates_locations) == {"osaka-japan": ("28-01-2020",)}

    def test_default_mapping_is_read_only(self) -> None:
        record = RelationRecord(id=7)
        with pytest.raises(TypeError):
            record.dates_locations["injected"] = ()

    def test_serialises_as_plain_dict(self) -> None:
        record = RelationRecord(id=7, dates_locations={"osaka-japan": ("28-01-2020",)})
        assert record.model_dump(mode="json", by_alias=True) == {
            "id": 7,
            "datesLocations": {"osaka-japan": ["28-01-2020"]},
        }


# ======================================================================
# Snapshot
# ======================================================================


class TestSnapshot:
    def test_lookups_by_id(self, sample_snapshot: Snapshot) -> None:
        assert sample_snapshot.artist_by_id(3).name == "Pink Floyd"
        assert sample_snapshot.locations_for(3) == ("london-uk", "berlin-germany")
        assert sample_snapshot.dates_for(3) == ("*01-06-1972",)
        assert sample_snapshot.artist_count == 5

    def test_missing_records_are_empty(self, sample_snapshot: Snapshot) -> None:
        assert sample_snapshot.artist_by_id(42) is None
        assert sample_snapshot.locations_for(42) == ()
        assert sample_snapshot.dates_for(5) == ()
        assert sample_snapshot.relations_for(5) == {}

    def test_relations_are_a_fresh_copy(self, sample_snapshot: Snapshot) -> None:
        relations = sample_snapshot.relations_for(1)
        relations["london-uk"].append("01-01-2030")
        relations["nowhere"] = []

        assert sample_snapshot.relations_for(1) == {
            "london-uk": ["23-08-2019"],
            "osaka-japan": ["22-08-2019", "20-08-2019"],
        }

    def test_stored_relations_cannot_be_edited(self, sample_snapshot: Snapshot) -> None:
        with pytest.raises(TypeError):
            sample_snapshot.relations[0].dates_locations["injected"] = ("01-01-2000",)
        assert "injected" not in sample_snapshot.relations_for(1)

    def test_first_record_wins_on_duplicate_id(self) -> None:
        snapshot = Snapshot(
            locations=(
                LocationRecord(id=1, locations=("first",)),
                LocationRecord(id=1, locations=("second",)),
            )
        )
        assert snapshot.locations_for(1) == ("first",)
        assert snapshot.duplicate_ids == {"locations": [1]}

    def test_empty_snapshot(self) -> None:
        snapshot = Snapshot()
        assert snapshot.artist_count == 0
        assert snapshot.duplicate_ids == {}
        assert snapshot.fetched_at.tzinfo is not None


# ======================================================================
# Query models
# ======================================================================


class TestSearchModels:
    def test_category_priority_follows_declaration_order(self) -> None:
        ordered = sorted(SuggestionCategory, key=lambda category: category.priority)
        assert [category.value for category in ordered] == [
            "artist/band",
            "member",
            "location",
            "creation date",
            "first album",
        ]

    def test_suggestions_compare_by_text_and_category(self) -> None:
        a = Suggestion(text="1990", category=SuggestionCategory.CREATION_DATE)
        b = Suggestion(text="1990", category=SuggestionCategory.CREATION_DATE)
        c = Suggestion(text="1990", category=SuggestionCategory.FIRST_ALBUM)
        assert a == b
        assert len({a, b, c}) == 2

    def test_filter_params_serialise_camel_case(self) -> None:
        params = FilterParams(
            creation_year_min=1965,
            creation_year_max=2024,
            first_album_year_min=1967,
            first_album_year_max=2024,
            members=frozenset({4}),
        )
        dumped = params.model_dump(mode="json", by_alias=True)
        assert dumped["creationYearMin"] == 1965
        assert dumped["firstAlbumYearMax"] == 2024
        assert dumped["members"] == [4]

    def test_filter_request_fields_are_optional(self) -> None:
        request = FilterRequest.model_validate({})
        assert request.creation_year_min is None
        assert request.members is None
