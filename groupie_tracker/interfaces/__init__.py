"""Public interface definitions for all external service providers.

Every external service is reached through one of the abstract base classes
in this package.  Concrete adapters live in ``groupie_tracker/providers/``
and are wired together in ``groupie_tracker/main.py``; tests inject mocks
built from the same specs.

    Interface               ->  Concrete implementations
    -----------------------------------------------------------------
    ITrackerDataProvider    ->  GroupieAPIProvider
    IGeocodeProvider        ->  MapboxGeocodeProvider, CachingGeocodeProvider
    ICacheProvider          ->  MemoryCacheProvider
"""

from groupie_tracker.interfaces.cache_provider import ICacheProvider
from groupie_tracker.interfaces.geocode_provider import IGeocodeProvider
from groupie_tracker.interfaces.tracker_data_provider import ITrackerDataProvider

__all__ = [
    "ICacheProvider",
    "IGeocodeProvider",
    "ITrackerDataProvider",
]
