"""Explicit registry of class-style resource types keyed by (module, resource name)."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from importlib.metadata import entry_points
from pathlib import Path
from typing import TypeAlias

from dsc_adapter.constants.dispatch import PROVIDER_ENTRY_POINT_GROUP
from dsc_adapter.exceptions import ProviderError
from dsc_adapter.model import CacheEntry
from dsc_adapter.providers.base import ClassResource
from dsc_adapter.providers.loading import import_source_file

logger = logging.getLogger(__name__)

TypeLoader: TypeAlias = Callable[[str, str], type[ClassResource] | None]


class ProviderRegistry:
    """Maps ``(module, name)`` to constructible resource types.

    Types are added only through ``register``, ``load_entry_points`` or the
    optional *fallback* loader; nothing is discovered implicitly.
    """

    def __init__(self, fallback: TypeLoader | None = None) -> None:
        self._types: dict[tuple[str, str], type[ClassResource]] = {}
        self._fallback = fallback

    def register(self, module: str, name: str, provider_type: type[ClassResource]) -> None:
        self._types[(module, name)] = provider_type

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def load_entry_points(self, group: str = PROVIDER_ENTRY_POINT_GROUP) -> int:
        """Register every ``<Module>/<Resource> = pkg.mod:Class`` entry point in *group*."""
        loaded = 0
        for entry_point in entry_points(group=group):
            module, sep, name = entry_point.name.partition("/")
            if not sep or not module or not name:
                logger.warning("Ignoring provider entry point with malformed name '%s'", entry_point.name)
                continue
            try:
                provider_type = entry_point.load()
            except (ImportError, AttributeError) as exc:
                logger.warning("Cannot load provider entry point '%s': %s", entry_point.name, exc)
                continue
            self.register(module, name, provider_type)
            loaded += 1
        logger.debug("Registered %d provider(s) from entry point group '%s'", loaded, group)
        return loaded

    def load_type(self, module: str, name: str) -> type[ClassResource]:
        """Return the registered type, consulting the fallback loader once when missing."""
        provider_type = self._types.get((module, name))
        if provider_type is None and self._fallback is not None:
            provider_type = self._fallback(module, name)
            if provider_type is not None:
                self.register(module, name, provider_type)
        if provider_type is None:
            raise ProviderError(f"No provider type registered for '{module}/{name}'")
        return provider_type


class SourceFileTypeLoader:
    """Fallback loader that imports a class named after the resource from its source file."""

    def __init__(self, entries: Iterable[CacheEntry]) -> None:
        self._paths = {
            (entry.info.module_name, entry.info.name): Path(entry.info.path)
            for entry in entries
            if entry.info.path.endswith(".py")
        }

    def __call__(self, module: str, name: str) -> type[ClassResource] | None:
        path = self._paths.get((module, name))
        if path is None:
            return None
        provider_type = getattr(import_source_file(path), name, None)
        return provider_type if isinstance(provider_type, type) else None
