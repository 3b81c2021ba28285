"""Constants used by the discovery cache."""

from __future__ import annotations

# Bump whenever the persisted document shape changes; older caches are discarded.
CACHE_SCHEMA_VERSION: int = 2

CACHE_FILENAME: str = "PythonAdapterCache.json"
CACHE_DIRNAME_WINDOWS: str = "dsc"
CACHE_DIRNAME_POSIX: str = ".dsc"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"

NANOSECONDS_PER_SECOND: int = 1_000_000_000
