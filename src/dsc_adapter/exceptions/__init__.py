"""Shared exception hierarchy for the adapter."""

from __future__ import annotations

from .base import AdapterError
from .config import ConfigError
from .dispatch import (
    ProviderError,
    ResourceNotFoundError,
    UnrecognizedImplementationError,
    UnsupportedPlatformError,
)
from .parsing import ManifestError, RequestError

__all__ = [
    "AdapterError",
    "ConfigError",
    "ManifestError",
    "ProviderError",
    "RequestError",
    "ResourceNotFoundError",
    "UnrecognizedImplementationError",
    "UnsupportedPlatformError",
]
