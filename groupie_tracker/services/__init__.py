"""Snapshot cache, query engine and artist detail assembly."""

from groupie_tracker.services.detail_assembler import DetailAssembler
from groupie_tracker.services.query_engine import QueryEngine
from groupie_tracker.services.snapshot_cache import SnapshotCache

__all__ = ["DetailAssembler", "QueryEngine", "SnapshotCache"]
