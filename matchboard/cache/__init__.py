"""Snapshot caching."""

from .snapshot_cache import CacheEntry, SnapshotCache

__all__ = ["CacheEntry", "SnapshotCache"]
