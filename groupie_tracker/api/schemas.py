"""Pydantic request/response schemas for the groupie-tracker API.

Request bodies reuse the domain models directly (``FilterRequest``); the
models here only wrap responses.  FastAPI serialises by alias, so field
names on the wire are camelCase exactly as the upstream API spells them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from groupie_tracker.models.entities import Artist


class SearchResponse(BaseModel):
    """Artists matching a search, in snapshot order."""

    artists: list[Artist] = Field(default_factory=list)
    total: int = 0


class CacheStatus(BaseModel):
    """State of the snapshot cache as reported by the health check."""

    fresh: bool
    artists: int = 0
    fetched_at: datetime | None = None
    refresh_count: int = 0
    last_error: str | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    cache: CacheStatus
    geocoding: bool


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
