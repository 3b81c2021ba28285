"""Resource execution capabilities and their default implementations."""

from __future__ import annotations

from dsc_adapter.providers.base import ClassResource, ResourceExecutor
from dsc_adapter.providers.registry import ProviderRegistry, SourceFileTypeLoader
from dsc_adapter.providers.script import ScriptFileExecutor

__all__ = [
    "ClassResource",
    "ProviderRegistry",
    "ResourceExecutor",
    "ScriptFileExecutor",
    "SourceFileTypeLoader",
]
