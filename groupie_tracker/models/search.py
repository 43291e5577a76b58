"""Query-side models: filter parameters and search suggestions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SuggestionCategory(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Which artist field a suggestion was drawn from.

    Declaration order is the ranking order used when sorting suggestions.
    """

    ARTIST = "artist/band"
    MEMBER = "member"
    LOCATION = "location"
    CREATION_DATE = "creation date"
    FIRST_ALBUM = "first album"

    @property
    def priority(self) -> int:
        return _CATEGORY_PRIORITY[self]


_CATEGORY_PRIORITY: dict[SuggestionCategory, int] = {
    category: rank for rank, category in enumerate(SuggestionCategory, start=1)
}


class Suggestion(BaseModel):
    """A search-box suggestion; two suggestions are equal iff text and category match."""

    model_config = ConfigDict(frozen=True)

    text: str
    category: SuggestionCategory = Field(serialization_alias="type")


class FilterParams(BaseModel):
    """Fully resolved filter: every bound present.

    Empty ``members`` / ``locations`` mean "no constraint".  Build instances
    through :func:`groupie_tracker.services.artist_filter.resolve_filter_params`
    to get data-driven defaults and validation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    creation_year_min: int = Field(alias="creationYearMin")
    creation_year_max: int = Field(alias="creationYearMax")
    first_album_year_min: int = Field(alias="firstAlbumYearMin")
    first_album_year_max: int = Field(alias="firstAlbumYearMax")
    members: frozenset[int] = frozenset()
    locations: frozenset[str] = frozenset()


class FilterRequest(BaseModel):
    """Filter as sent by a client; omitted fields take the data-driven defaults."""

    model_config = ConfigDict(populate_by_name=True)

    creation_year_min: int | None = Field(default=None, alias="creationYearMin")
    creation_year_max: int | None = Field(default=None, alias="creationYearMax")
    first_album_year_min: int | None = Field(default=None, alias="firstAlbumYearMin")
    first_album_year_max: int | None = Field(default=None, alias="firstAlbumYearMax")
    members: list[int] | None = None
    locations: list[str] | None = None
