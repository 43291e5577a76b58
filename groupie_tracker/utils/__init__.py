"""Utility modules for groupie-tracker.

- **errors** -- exception hierarchy rooted at GroupieTrackerError; each
  failure mode has its own subclass so the API can map it to a status code.
- **concurrency** -- ``throttled_gather`` (semaphore-bounded fan-out) and
  ``gather_settled`` (wait for every awaitable, collect every error).
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from groupie_tracker.utils.concurrency import gather_settled, throttled_gather
from groupie_tracker.utils.errors import (
    ConfigurationError,
    GeocodeMissError,
    GroupieTrackerError,
    InvalidFilterRangeError,
    UpstreamFetchError,
)
from groupie_tracker.utils.logging import configure_logging, get_logger

__all__ = [
    # concurrency
    "gather_settled",
    "throttled_gather",
    # errors
    "ConfigurationError",
    "GeocodeMissError",
    "GroupieTrackerError",
    "InvalidFilterRangeError",
    "UpstreamFetchError",
    # logging
    "configure_logging",
    "get_logger",
]
