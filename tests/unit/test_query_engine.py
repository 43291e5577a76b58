"""Unit tests for QueryEngine, the cache-bound query facade."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from groupie_tracker.models.search import FilterParams, FilterRequest, SuggestionCategory
from groupie_tracker.models.snapshot import Snapshot
from groupie_tracker.services.query_engine import QueryEngine
from groupie_tracker.services.snapshot_cache import SnapshotCache
from groupie_tracker.utils.errors import InvalidFilterRangeError, UpstreamFetchError


@pytest.fixture
def mock_cache(sample_snapshot: Snapshot) -> MagicMock:
    cache = MagicMock(spec=SnapshotCache)
    cache.get = AsyncMock(return_value=sample_snapshot)
    return cache


@pytest.fixture
def engine(mock_cache: MagicMock) -> QueryEngine:
    return QueryEngine(mock_cache)


class TestQueryEngine:
    @pytest.mark.asyncio
    async def test_filter_without_request_uses_defaults(
        self, engine: QueryEngine, mock_cache: MagicMock
    ) -> None:
        artists = await engine.filter()

        assert [artist.id for artist in artists] == [1, 2, 3, 5]
        mock_cache.get.assert_awaited_once_with(allow_stale=True)

    @pytest.mark.asyncio
    async def test_filter_resolves_request(self, engine: QueryEngine) -> None:
        artists = await engine.filter("", FilterRequest(members=[5]), current_year=2024)
        assert [artist.name for artist in artists] == ["Pink Floyd"]

    @pytest.mark.asyncio
    async def test_filter_rejects_invalid_request(self, engine: QueryEngine) -> None:
        request = FilterRequest(first_album_year_min=2010, first_album_year_max=2000)
        with pytest.raises(InvalidFilterRangeError):
            await engine.filter("", request, current_year=2024)

    @pytest.mark.asyncio
    async def test_filter_validates_ready_params(self, engine: QueryEngine) -> None:
        params = FilterParams(
            creation_year_min=2000,
            creation_year_max=1990,
            first_album_year_min=1960,
            first_album_year_max=2024,
        )
        with pytest.raises(InvalidFilterRangeError):
            await engine.filter("", params)

    @pytest.mark.asyncio
    async def test_filter_with_ready_params_skips_clamping(self, engine: QueryEngine) -> None:
        params = FilterParams(
            creation_year_min=1900,
            creation_year_max=2100,
            first_album_year_min=1900,
            first_album_year_max=2100,
        )
        artists = await engine.filter("1990", params)
        assert [artist.name for artist in artists] == ["Nineties Band"]

    @pytest.mark.asyncio
    async def test_suggest(self, engine: QueryEngine) -> None:
        suggestions = await engine.suggest("freddie", limit=1)
        assert len(suggestions) == 1
        assert suggestions[0].category is SuggestionCategory.ARTIST

    @pytest.mark.asyncio
    async def test_blank_suggest_skips_the_cache(
        self, engine: QueryEngine, mock_cache: MagicMock
    ) -> None:
        assert await engine.suggest("  ") == []
        mock_cache.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_filter_defaults(self, engine: QueryEngine) -> None:
        params = await engine.filter_defaults(current_year=2024)
        assert params.creation_year_min == 1965
        assert params.first_album_year_max == 2024

    @pytest.mark.asyncio
    async def test_stale_flag_is_forwarded(self, mock_cache: MagicMock) -> None:
        engine = QueryEngine(mock_cache, allow_stale=False)
        await engine.filter_defaults()
        mock_cache.get.assert_awaited_once_with(allow_stale=False)

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, mock_cache: MagicMock) -> None:
        mock_cache.get = AsyncMock(side_effect=UpstreamFetchError("down"))
        engine = QueryEngine(mock_cache)
        with pytest.raises(UpstreamFetchError):
            await engine.filter("queen")
