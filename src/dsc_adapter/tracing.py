"""Trace protocol on top of stdlib logging.

Every record is rendered as a single-key JSON object ``{"<level>": "<message>"}``
on its own line, which is what the calling engine parses from stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from dsc_adapter.constants.tracing import DEFAULT_TRACE_LEVEL, TRACE_LEVEL_NUM, TRACE_LEVELS
from dsc_adapter.io import dumps_compact

TRACE: int = TRACE_LEVEL_NUM
logging.addLevelName(TRACE, "TRACE")

_PACKAGE_LOGGER = "dsc_adapter"


def protocol_level_name(levelno: int) -> str:
    """Map a logging level number onto the closest protocol level name."""
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    if levelno >= logging.DEBUG:
        return "debug"
    return "trace"


class TraceFormatter(logging.Formatter):
    """Format log records as trace protocol JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return dumps_compact({protocol_level_name(record.levelno): message})


def configure_tracing(level: str = DEFAULT_TRACE_LEVEL, stream: TextIO | None = None) -> logging.Handler:
    """Route the package logger to *stream* (stderr by default) in trace protocol form.

    Replaces any handler installed by an earlier call so repeated configuration
    does not duplicate lines.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(TraceFormatter())

    logger = logging.getLogger(_PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if isinstance(existing.formatter, TraceFormatter):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(TRACE_LEVELS.get(level, TRACE_LEVELS[DEFAULT_TRACE_LEVEL]))
    logger.propagate = False
    return handler
