"""groupie-tracker API layer -- routes, schemas, and middleware."""

from groupie_tracker.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from groupie_tracker.api.routes import router
from groupie_tracker.api.schemas import (
    CacheStatus,
    ErrorResponse,
    HealthResponse,
    SearchResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "CacheStatus",
    "ErrorResponse",
    "HealthResponse",
    "SearchResponse",
]
