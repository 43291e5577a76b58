"""groupie-tracker FastAPI application entry point.

Wires together providers, services, and routes via dependency injection.
Loads configuration from ``.env`` / environment, configures structured
logging, and warms the snapshot cache on startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from groupie_tracker import __version__
from groupie_tracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from groupie_tracker.api.routes import router as api_router
from groupie_tracker.config.settings import Settings
from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.providers.cache.memory_cache import MemoryCacheProvider
from groupie_tracker.providers.geocode.caching_provider import CachingGeocodeProvider
from groupie_tracker.providers.geocode.mapbox_provider import MapboxGeocodeProvider
from groupie_tracker.providers.upstream.groupie_api_provider import GroupieAPIProvider
from groupie_tracker.services.detail_assembler import DetailAssembler
from groupie_tracker.services.query_engine import QueryEngine
from groupie_tracker.services.snapshot_cache import SnapshotCache
from groupie_tracker.utils.errors import UpstreamFetchError
from groupie_tracker.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Geocoder selection
# ---------------------------------------------------------------------------


def _build_geocoder(
    app_settings: Settings,
    http_client: httpx.AsyncClient,
    geocode_cache: MemoryCacheProvider,
) -> IGeocodeProvider | None:
    """Return a cached Mapbox geocoder, or ``None`` when no token is configured."""
    if not app_settings.geocoding_enabled():
        _logger.warning("geocoding_disabled", reason="MAPBOX_ACCESS_TOKEN not set")
        return None

    return CachingGeocodeProvider(
        inner=MapboxGeocodeProvider(settings=app_settings, http_client=http_client),
        cache=geocode_cache,
    )


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.upstream_timeout_seconds),
        follow_redirects=True,
    )

    # -- Upstream + snapshot cache --
    data_provider = GroupieAPIProvider(settings=app_settings, http_client=http_client)
    snapshot_cache = SnapshotCache(
        provider=data_provider,
        ttl_seconds=app_settings.cache_ttl_seconds,
        single_flight=app_settings.cache_single_flight,
    )

    # -- Geocoding (optional) --
    geocode_cache = MemoryCacheProvider(
        max_size=app_settings.geocode_cache_size,
        ttl=app_settings.geocode_cache_ttl_seconds,
    )
    geocoder = _build_geocoder(app_settings, http_client, geocode_cache)

    # -- Services --
    query_engine = QueryEngine(
        snapshot_cache,
        allow_stale=app_settings.serve_stale_on_error,
    )
    detail_assembler = DetailAssembler(
        snapshot_cache,
        geocoder,
        concurrency=app_settings.geocode_concurrency,
        allow_stale=app_settings.serve_stale_on_error,
    )

    return {
        "settings": app_settings,
        "http_client": http_client,
        "data_provider": data_provider,
        "snapshot_cache": snapshot_cache,
        "geocode_cache": geocode_cache,
        "geocoder": geocoder,
        "query_engine": query_engine,
        "detail_assembler": detail_assembler,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build services and warm the snapshot cache on startup, clean up on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    snapshot_cache: SnapshotCache = components["snapshot_cache"]
    try:
        snapshot = await snapshot_cache.refresh()
    except UpstreamFetchError as exc:
        # Requests retry the refresh lazily; the app still starts.
        _logger.error("snapshot_warmup_failed", error=exc.message)
    else:
        _logger.info("snapshot_warmed", artists=snapshot.artist_count)

    geocoder = components["geocoder"]
    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        geocoder=geocoder.get_provider_name() if geocoder else None,
        cache_ttl_seconds=app_settings.cache_ttl_seconds,
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    geocode_cache: MemoryCacheProvider = components["geocode_cache"]
    _logger.info("app_shutdown", message="HTTP client closed", geocode_cache=geocode_cache.stats())


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="groupie-tracker API",
        version=__version__,
        description=(
            "Search, filter and browse bands from the Groupie Trackers API, "
            "with search-box suggestions and geocoded concert locations."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings or settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "groupie_tracker.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()
