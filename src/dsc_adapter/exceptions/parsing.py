"""Input and manifest parsing exceptions."""

from __future__ import annotations

from dsc_adapter.exceptions.base import AdapterError


class RequestError(AdapterError, ValueError):
    """Raised when the request JSON cannot be turned into desired-state requests."""


class ManifestError(AdapterError, ValueError):
    """Raised when a module or resource manifest cannot be read."""
