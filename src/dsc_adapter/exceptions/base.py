"""Base exception for the adapter."""

from __future__ import annotations


class AdapterError(Exception):
    """Base class for all adapter errors."""
