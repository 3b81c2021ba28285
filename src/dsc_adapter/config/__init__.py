"""Configuration loading for the adapter."""

from __future__ import annotations

from dsc_adapter.config.loader import load_config, validate_trace_level, with_trace_level
from dsc_adapter.config.model import AdapterConfig

__all__ = ["AdapterConfig", "load_config", "validate_trace_level", "with_trace_level"]
