"""Groupie Trackers REST API provider.

Fetches the four public datasets (artists, locations, dates, relations) over
plain JSON GETs and validates them into domain models.  The live API wraps
the three per-artist datasets in an ``{"index": [...]}`` envelope; bare
lists are accepted too.
"""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from groupie_tracker.config.settings import Settings
from groupie_tracker.interfaces.tracker_data_provider import ITrackerDataProvider
from groupie_tracker.models.entities import (
    Artist,
    DateRecord,
    LocationRecord,
    RelationRecord,
)
from groupie_tracker.utils.errors import UpstreamFetchError

logger = structlog.get_logger(logger_name=__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)

_DEFAULT_HEADERS = {
    "User-Agent": "groupie-tracker/0.1.0",
    "Accept": "application/json",
}


class GroupieAPIProvider(ITrackerDataProvider):
    """Upstream data source backed by the Groupie Trackers HTTP API.

    A shared ``httpx.AsyncClient`` may be injected (the app passes its
    lifespan-managed client); otherwise the provider creates and owns one.
    Every request carries the configured per-call timeout, after which the
    fetch fails instead of hanging.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._timeout = httpx.Timeout(settings.upstream_timeout_seconds)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get_json(self, dataset: str, url: str) -> Any:
        """GET *url* and decode its JSON body, mapping every failure to UpstreamFetchError."""
        try:
            response = await self._client.get(url, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamFetchError(
                message=f"Timeout fetching {dataset} from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(
                message=f"HTTP error fetching {dataset} from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code != httpx.codes.OK:
            raise UpstreamFetchError(
                message=f"Received status {response.status_code} fetching {dataset} from {url}",
                provider_name=self.get_provider_name(),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFetchError(
                message=f"Unparsable JSON for {dataset} from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _parse_records(
        self, dataset: str, payload: Any, model: type[_ModelT]
    ) -> list[_ModelT]:
        """Validate a list payload (optionally ``{"index": [...]}``-wrapped) into *model* instances."""
        records = payload.get("index") if isinstance(payload, dict) else payload
        if not isinstance(records, list):
            raise UpstreamFetchError(
                message=f"Expected a list of {dataset} records, got {type(payload).__name__}",
                provider_name=self.get_provider_name(),
            )

        try:
            parsed = [model.model_validate(item) for item in records]
        except ValidationError as exc:
            raise UpstreamFetchError(
                message=f"Malformed {dataset} payload: {exc.error_count()} validation error(s)",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug("upstream_dataset_parsed", dataset=dataset, records=len(parsed))
        return parsed

    async def _fetch(self, dataset: str, url: str, model: type[_ModelT]) -> list[_ModelT]:
        payload = await self._get_json(dataset, url)
        return self._parse_records(dataset, payload, model)

    # ------------------------------------------------------------------
    # ITrackerDataProvider implementation
    # ------------------------------------------------------------------

    async def fetch_artists(self) -> list[Artist]:
        return await self._fetch("artists", self._settings.artists_url, Artist)

    async def fetch_locations(self) -> list[LocationRecord]:
        return await self._fetch("locations", self._settings.locations_url, LocationRecord)

    async def fetch_dates(self) -> list[DateRecord]:
        return await self._fetch("dates", self._settings.dates_url, DateRecord)

    async def fetch_relations(self) -> list[RelationRecord]:
        return await self._fetch("relations", self._settings.relations_url, RelationRecord)

    def get_provider_name(self) -> str:
        return "groupie_api"

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()
