"""Configuration-related exceptions."""

from __future__ import annotations

from dsc_adapter.exceptions.base import AdapterError


class ConfigError(AdapterError, ValueError):
    """Raised when adapter configuration is invalid."""
