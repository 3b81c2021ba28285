"""CLI entrypoint for the resource adapter."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from dsc_adapter import __version__
from dsc_adapter.adapter import Adapter
from dsc_adapter.config import load_config, with_trace_level
from dsc_adapter.constants.branding import CLI_DESCRIPTION, PROG_NAME
from dsc_adapter.constants.config import ENV_TRACE_LEVEL
from dsc_adapter.constants.dispatch import (
    INVOKE_OPERATIONS,
    OPERATION_CLEAR_CACHE,
    OPERATION_LIST,
    OPERATION_VALIDATE,
    VALID_OPERATIONS,
)
from dsc_adapter.constants.tracing import DEFAULT_TRACE_LEVEL, TRACE_LEVELS
from dsc_adapter.exceptions import AdapterError, ConfigError
from dsc_adapter.io import dumps_compact
from dsc_adapter.tracing import configure_tracing

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("operation", choices=VALID_OPERATIONS, help="Adapter operation to run")
    parser.add_argument(
        "-i",
        "--input",
        default=None,
        help="Input JSON (read from stdin when omitted and stdin is not a terminal)",
    )
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument(
        "-t",
        "--trace-level",
        choices=sorted(TRACE_LEVELS),
        default=None,
        help=f"Trace threshold written to stderr (default: ${ENV_TRACE_LEVEL} or {DEFAULT_TRACE_LEVEL})",
    )
    parser.add_argument("-n", "--no-cache", action="store_true", help="Disable cache reads/writes")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_tracing(args.trace_level or os.environ.get(ENV_TRACE_LEVEL, DEFAULT_TRACE_LEVEL).strip().lower())

    try:
        config = load_config(args.config)
        if args.trace_level:
            config = with_trace_level(config, args.trace_level)
        if args.no_cache:
            config = replace(config, use_cache=False)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    configure_tracing(config.trace_level)
    adapter = Adapter(config)

    try:
        return _run_operation(adapter, args)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except AdapterError as exc:
        logger.error("%s", exc)
        return 1


def _run_operation(adapter: Adapter, args: argparse.Namespace) -> int:
    """Run the selected operation and print its output to stdout."""
    if args.operation == OPERATION_CLEAR_CACHE:
        removed = adapter.clear_cache()
        logger.info("Discovery cache %s", "removed" if removed else "was already absent")
        return 0

    if args.operation == OPERATION_VALIDATE:
        print(dumps_compact(adapter.validate()))
        return 0

    if args.operation == OPERATION_LIST:
        for resource in adapter.list_resources():
            print(dumps_compact(resource))
        return 0

    if args.operation in INVOKE_OPERATIONS:
        print(dumps_compact(adapter.invoke(args.operation, _read_input(args.input))))
        return 0

    raise AdapterError(f"Unsupported operation: {args.operation}")


def _read_input(value: str | None) -> str:
    if value is not None:
        return value
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read()
