"""Upstream data source providers."""

from groupie_tracker.providers.upstream.groupie_api_provider import GroupieAPIProvider

__all__ = ["GroupieAPIProvider"]
