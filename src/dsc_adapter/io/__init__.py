"""Shared file I/O helpers."""

from .files import file_mtime_ns, iter_tracked_files
from .json_io import dumps_compact, load_json_file, write_json_atomic

__all__ = ["dumps_compact", "file_mtime_ns", "iter_tracked_files", "load_json_file", "write_json_atomic"]
