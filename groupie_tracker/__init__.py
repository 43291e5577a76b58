"""groupie-tracker -- browse, search and filter bands from the Groupie Trackers API."""

__version__ = "0.1.0"
