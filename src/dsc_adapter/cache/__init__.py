"""Discovery cache persistence and validity checks."""

from __future__ import annotations

from dsc_adapter.cache.staleness import StalenessDetector, truncate_to_seconds
from dsc_adapter.cache.store import CacheStore, default_cache_path

__all__ = ["CacheStore", "StalenessDetector", "default_cache_path", "truncate_to_seconds"]
