"""Custom exception hierarchy for groupie-tracker.

All application exceptions inherit from :class:`GroupieTrackerError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "groupie_api", "mapbox") caused the failure.

    GroupieTrackerError  (base -- catch-all for any groupie-tracker error)
    +-- UpstreamFetchError       (snapshot refresh: bad status, timeout, bad JSON)
    +-- InvalidFilterRangeError  (client sent an impossible filter)
    +-- GeocodeMissError         (address could not be resolved)
    +-- ConfigurationError       (startup / missing config)

An unknown artist id is *not* an error: the detail assembler returns
``None`` for it.  ``GeocodeMissError`` never leaves the assembler; it is
recovered by dropping the location from the result.
"""

from __future__ import annotations


class GroupieTrackerError(Exception):
    """Base exception for all groupie-tracker errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[mapbox] No match for 'x'``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream / snapshot errors
# ---------------------------------------------------------------------------

class UpstreamFetchError(GroupieTrackerError):
    """Raised when an upstream data source cannot deliver a usable payload.

    When raised by a snapshot refresh, ``failures`` holds every error
    collected from the fan-out, one per failing source, so nothing is
    silently dropped.
    """

    def __init__(
        self,
        message: str = "Upstream data source request failed",
        provider_name: str | None = None,
        failures: list[BaseException] | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._failures = list(failures or [])

    @property
    def failures(self) -> list[BaseException]:
        return list(self._failures)


# ---------------------------------------------------------------------------
# Query errors
# ---------------------------------------------------------------------------

class InvalidFilterRangeError(GroupieTrackerError):
    """Raised when filter parameters are rejected before querying.

    Covers ``min > max`` in a year range, a non-positive member count and a
    location string that is empty after trimming.
    """

    def __init__(
        self,
        message: str = "Invalid filter parameters",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Geocoding errors
# ---------------------------------------------------------------------------

class GeocodeMissError(GroupieTrackerError):
    """Raised by a geocode provider when an address cannot be resolved."""

    def __init__(
        self,
        message: str = "Address could not be geocoded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(GroupieTrackerError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
