"""FastAPI routes for groupie-tracker.

    Endpoint                    Method  Description
    -----------------------------------------------------------------
    /api/search                 POST    Filter + free-text search (?q=...)
    /api/suggestions            GET     Ranked search-box suggestions (?q=...)
    /api/artist/{artist_id}     GET     Artist detail with geocoded locations
    /api/filters/defaults       GET     Widest filter the data supports
    /api/health                 GET     Snapshot cache status

Services are resolved from ``app.state`` (populated in ``main.py``) through
``Depends`` helpers and ``Annotated`` aliases, so tests can mount this
router on a bare app with fakes on its state.
"""

from __future__ import annotations

import re
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from groupie_tracker import __version__
from groupie_tracker.api.schemas import (
    CacheStatus,
    ErrorResponse,
    HealthResponse,
    SearchResponse,
)
from groupie_tracker.config.settings import Settings
from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.models.entities import ArtistDetail
from groupie_tracker.models.search import FilterParams, FilterRequest, Suggestion
from groupie_tracker.services.detail_assembler import DetailAssembler
from groupie_tracker.services.query_engine import QueryEngine
from groupie_tracker.services.snapshot_cache import SnapshotCache

router = APIRouter(prefix="/api", tags=["artists"])

# Signed ASCII decimal; anything else is rejected with 400.
_ARTIST_ID = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Dependency injection helpers -- resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_query_engine(request: Request) -> QueryEngine:
    return request.app.state.query_engine


def _get_detail_assembler(request: Request) -> DetailAssembler:
    return request.app.state.detail_assembler


def _get_snapshot_cache(request: Request) -> SnapshotCache:
    return request.app.state.snapshot_cache


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_geocoder(request: Request) -> IGeocodeProvider | None:
    return getattr(request.app.state, "geocoder", None)


QueryEngineDep = Annotated[QueryEngine, Depends(_get_query_engine)]
DetailAssemblerDep = Annotated[DetailAssembler, Depends(_get_detail_assembler)]
SnapshotCacheDep = Annotated[SnapshotCache, Depends(_get_snapshot_cache)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]
GeocoderDep = Annotated[IGeocodeProvider | None, Depends(_get_geocoder)]

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/search",
    response_model=SearchResponse,
    responses=_ERROR_RESPONSES,
    summary="Filter and search artists",
)
async def search_artists(
    query_engine: QueryEngineDep,
    q: Annotated[str, Query()] = "",
    filters: Annotated[FilterRequest | None, Body()] = None,
) -> SearchResponse:
    """Return artists passing *filters* and matching *q*; omitted filter fields span the data."""
    artists = await query_engine.filter(q.strip(), filters)
    return SearchResponse(artists=artists, total=len(artists))


@router.get(
    "/suggestions",
    response_model=list[Suggestion],
    responses=_ERROR_RESPONSES,
    summary="Search-box suggestions",
)
async def get_suggestions(
    query_engine: QueryEngineDep,
    settings: SettingsDep,
    q: Annotated[str, Query()] = "",
) -> list[Suggestion]:
    if not q.strip():
        raise HTTPException(status_code=400, detail="Missing search query")
    return await query_engine.suggest(q, limit=settings.suggestion_limit)


@router.get(
    "/artist/{artist_id}",
    response_model=ArtistDetail,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Artist detail",
)
async def get_artist(artist_id: str, assembler: DetailAssemblerDep) -> ArtistDetail:
    if not _ARTIST_ID.fullmatch(artist_id):
        raise HTTPException(status_code=400, detail="Invalid artist ID")
    detail = await assembler.assemble_artist(int(artist_id))
    if detail is None:
        raise HTTPException(status_code=404, detail="Artist not found")
    return detail


@router.get(
    "/filters/defaults",
    response_model=FilterParams,
    responses={502: {"model": ErrorResponse}},
    summary="Data-driven filter bounds",
)
async def get_filter_defaults(query_engine: QueryEngineDep) -> FilterParams:
    return await query_engine.filter_defaults()


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(cache: SnapshotCacheDep, geocoder: GeocoderDep) -> HealthResponse:
    """Report cache freshness without triggering a refresh."""
    snapshot = cache.current
    fresh = cache.is_fresh()
    if fresh:
        status = "healthy"
    elif snapshot is not None:
        status = "degraded"
    else:
        status = "unhealthy"

    return HealthResponse(
        status=status,
        version=__version__,
        cache=CacheStatus(
            fresh=fresh,
            artists=snapshot.artist_count if snapshot else 0,
            fetched_at=snapshot.fetched_at if snapshot else None,
            refresh_count=cache.refresh_count,
            last_error=cache.last_error,
        ),
        geocoding=geocoder is not None and geocoder.is_available(),
    )
