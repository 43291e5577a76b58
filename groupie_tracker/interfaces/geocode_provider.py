"""Abstract base class for geocoding providers.

The contract is deliberately narrow: a free-text address goes in, a
:class:`GeoLocation` comes out, and any failure to resolve (no match,
non-OK status, timeout, garbage body) is reported as
:class:`~groupie_tracker.utils.errors.GeocodeMissError`.  Callers treat a
miss as "drop this address", never as a fatal error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from groupie_tracker.models.entities import GeoLocation


class IGeocodeProvider(ABC):
    """Contract for address-to-coordinates services."""

    @abstractmethod
    async def geocode(self, address: str) -> GeoLocation:
        """Resolve *address* to coordinates.

        Parameters
        ----------
        address:
            Free-text address, e.g. ``"north_carolina-usa"``.

        Returns
        -------
        GeoLocation
            The address together with its latitude and longitude.

        Raises
        ------
        groupie_tracker.utils.errors.GeocodeMissError
            If the address cannot be resolved for any reason.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"mapbox"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured (e.g. has a token)."""
