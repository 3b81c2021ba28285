"""Branding constants for CLI help text."""

from __future__ import annotations

PROG_NAME: str = "dsc-adapter"
CLI_DESCRIPTION: str = "Discovery-cached adapter for Get/Set/Test/Export resource invocation"
