"""Abstract base class for the upstream artist/tour data source.

The snapshot cache depends only on this contract, so tests can inject a
fake and a different upstream (a local JSON dump, another API) can be
plugged in from ``main.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from groupie_tracker.models.entities import (
    Artist,
    DateRecord,
    LocationRecord,
    RelationRecord,
)


class ITrackerDataProvider(ABC):
    """Contract for the four read-only datasets a snapshot is built from.

    Each method performs one fetch.  Any failure (transport error, timeout,
    non-OK status, unparsable or schema-invalid payload) must be raised as
    :class:`~groupie_tracker.utils.errors.UpstreamFetchError`.  Methods do
    not retry.
    """

    @abstractmethod
    async def fetch_artists(self) -> list[Artist]:
        """Fetch every artist record."""

    @abstractmethod
    async def fetch_locations(self) -> list[LocationRecord]:
        """Fetch the per-artist tour location lists."""

    @abstractmethod
    async def fetch_dates(self) -> list[DateRecord]:
        """Fetch the per-artist concert date lists."""

    @abstractmethod
    async def fetch_relations(self) -> list[RelationRecord]:
        """Fetch the per-artist location -> dates mappings."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"groupie_api"``."""
