"""Allow ``python -m groupie_tracker`` to start the API server."""

from groupie_tracker.main import run

run()
