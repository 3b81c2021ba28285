"""Cache loading and persistence for discovery results."""

from __future__ import annotations

import logging
from contextlib import suppress
from pathlib import Path

from dsc_adapter.constants.cache import (
    CACHE_DIRNAME_POSIX,
    CACHE_DIRNAME_WINDOWS,
    CACHE_FILENAME,
    CACHE_TEMP_PREFIX,
    CACHE_TEMP_SUFFIX,
)
from dsc_adapter.io import load_json_file, write_json_atomic
from dsc_adapter.model import CacheDocument, CacheEntry
from dsc_adapter.runtime import RuntimeInfo

logger = logging.getLogger(__name__)


def default_cache_path(runtime: RuntimeInfo) -> Path:
    """Return the per-platform cache file location under the user-local state directory."""
    if runtime.is_windows and runtime.local_app_data:
        return Path(runtime.local_app_data) / CACHE_DIRNAME_WINDOWS / CACHE_FILENAME
    return Path(runtime.home or Path.home()) / CACHE_DIRNAME_POSIX / CACHE_FILENAME


class CacheStore:
    """Reads and writes the cache document at a fixed path.

    The expected schema version is supplied at construction; documents with
    any other version are treated as absent.
    """

    def __init__(self, path: Path, *, schema_version: int) -> None:
        self.path = path
        self.schema_version = schema_version

    def load(self) -> CacheDocument | None:
        """Return the cached document, or ``None`` when it is absent or unusable."""
        if not self.path.is_file():
            logger.debug("Cache file not found '%s'", self.path)
            return None

        logger.debug("Reading from discovery cache file %s", self.path)
        try:
            payload = load_json_file(self.path)
        except (OSError, ValueError) as exc:
            logger.debug("Discarding unreadable cache file %s: %s", self.path, exc)
            return None

        if not isinstance(payload, dict):
            logger.debug("Discarding cache file %s: top level is not an object", self.path)
            return None

        version = payload.get("schema_version")
        if version != self.schema_version:
            logger.debug(
                "Incompatible version of cache in file '%s' (expected '%s')",
                version,
                self.schema_version,
            )
            return None

        return CacheDocument(
            schema_version=self.schema_version,
            search_paths=frozenset(_string_items(payload.get("search_paths"))),
            entries=tuple(_load_entries(payload.get("entries"))),
        )

    def save(self, document: CacheDocument) -> None:
        """Overwrite the cache file with *document*."""
        logger.debug("Saving discovery cache to '%s'", self.path)
        write_json_atomic(
            path=self.path,
            payload=document.to_dict(),
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )

    def clear(self) -> bool:
        """Delete the cache file; return whether a file was removed."""
        with suppress(FileNotFoundError):
            self.path.unlink()
            logger.debug("Removed cache file '%s'", self.path)
            return True
        return False


def _string_items(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, str)]


def _load_entries(raw: object) -> list[CacheEntry]:
    if not isinstance(raw, list):
        return []

    entries: list[CacheEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            entries.append(CacheEntry.from_dict(item))
        except ValueError as exc:
            logger.debug("Skipping malformed cache entry: %s", exc)
    return entries
