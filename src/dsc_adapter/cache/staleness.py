"""Staleness checks for the discovery cache."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from dsc_adapter.constants.cache import NANOSECONDS_PER_SECOND
from dsc_adapter.io import file_mtime_ns
from dsc_adapter.model import CacheDocument, CacheEntry
from dsc_adapter.tracing import TRACE

logger = logging.getLogger(__name__)


def truncate_to_seconds(mtime_ns: int) -> int:
    """Drop sub-second precision from a nanosecond timestamp."""
    return mtime_ns - (mtime_ns % NANOSECONDS_PER_SECOND)


class StalenessDetector:
    """Decides whether a cache document still reflects the installed resources.

    ``search_path_lister`` returns the live set of plugin-search directories;
    it is consulted only by the unfiltered check.
    """

    def __init__(
        self,
        *,
        schema_version: int,
        search_path_lister: Callable[[], frozenset[str]],
    ) -> None:
        self.schema_version = schema_version
        self._search_path_lister = search_path_lister

    def is_file_stale(self, path: str, cached_mtime_ns: int) -> bool:
        """Return True when *path* is gone or its whole-second mtime moved."""
        file_path = Path(path)
        try:
            current = file_mtime_ns(file_path)
        except FileNotFoundError:
            logger.debug("Detected non-existent cache entry '%s'", path)
            return True
        except OSError as exc:
            logger.debug("Cannot stat cache entry '%s': %s", path, exc)
            return True

        if truncate_to_seconds(current) != truncate_to_seconds(cached_mtime_ns):
            logger.debug("Detected stale cache entry '%s'", path)
            return True
        return False

    def is_stale(self, document: CacheDocument, requested_modules: Iterable[str] = ()) -> bool:
        """Return True when *document* must be rebuilt.

        With *requested_modules* only those modules are validated; without it
        every tracked file is checked and search-path drift is detected.
        """
        if document.schema_version != self.schema_version:
            logger.debug(
                "Incompatible version of cache '%s' (expected '%s')",
                document.schema_version,
                self.schema_version,
            )
            return True

        if not document.entries:
            logger.debug("Discovery cache is empty")
            return True

        modules = sorted(set(requested_modules))
        if modules:
            return self._modules_stale(document, modules)

        logger.debug("Checking cache for stale entries")
        if any(self._entry_stale(entry) for entry in document.entries):
            return True

        logger.debug("Checking cache for stale search paths")
        drift = document.search_paths ^ self._search_path_lister()
        if drift:
            logger.debug("Search path diff '%s'", ", ".join(sorted(drift)))
            return True
        return False

    def _modules_stale(self, document: CacheDocument, modules: list[str]) -> bool:
        for module in modules:
            prefix = f"{module}/"
            matching = [entry for entry in document.entries if entry.type_key.startswith(prefix)]
            if not matching:
                logger.debug("Module '%s' not found in discovery cache", module)
                return True
            logger.log(TRACE, "Checking %d cached resource(s) of module '%s'", len(matching), module)
            if any(self._entry_stale(entry) for entry in matching):
                return True
        return False

    def _entry_stale(self, entry: CacheEntry) -> bool:
        return any(self.is_file_stale(path, mtime_ns) for path, mtime_ns in entry.tracked_files.items())
