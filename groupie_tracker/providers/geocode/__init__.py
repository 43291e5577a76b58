"""Geocoding providers."""

from groupie_tracker.providers.geocode.caching_provider import CachingGeocodeProvider
from groupie_tracker.providers.geocode.mapbox_provider import MapboxGeocodeProvider

__all__ = ["CachingGeocodeProvider", "MapboxGeocodeProvider"]
