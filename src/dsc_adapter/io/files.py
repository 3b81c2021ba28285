"""Filesystem helpers for freshness tracking."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def file_mtime_ns(path: Path) -> int:
    """Return the modification time of *path* in nanoseconds."""
    return int(path.stat().st_mtime_ns)


def iter_tracked_files(directory: Path, suffixes: frozenset[str]) -> Iterator[tuple[str, int]]:
    """Yield ``(path, mtime_ns)`` for files under *directory* whose suffix is allowlisted.

    Unreadable entries are skipped; a missing directory yields nothing.
    """
    if not directory.is_dir():
        return
    for dirpath, _dirnames, filenames in os.walk(directory):
        for filename in sorted(filenames):
            candidate = Path(dirpath) / filename
            if candidate.suffix.lower() not in suffixes:
                continue
            try:
                yield str(candidate), file_mtime_ns(candidate)
            except OSError as exc:
                logger.debug("Skipping unreadable tracked file %s: %s", candidate, exc)
