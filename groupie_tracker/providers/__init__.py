"""Concrete adapters for the interfaces in ``groupie_tracker.interfaces``."""
