"""Abstract base class for key-value cache providers.

Used to memoise geocoding results: tour locations repeat across artists and
across detail-page views, and each Mapbox lookup costs a network round trip.
Implementations may use an in-memory dict, Redis, or any other backend
without touching the geocoding code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* using the provider's configured expiry."""
