"""Trace protocol levels."""

from __future__ import annotations

import logging

TRACE_LEVEL_NUM: int = 5

# Protocol level name -> logging level.
TRACE_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE_LEVEL_NUM,
}
DEFAULT_TRACE_LEVEL: str = "warn"
