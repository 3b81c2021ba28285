"""Enumeration of installed modules and resource descriptors on disk.

Layout under each configured module path::

    <module path>/<Module>/[<version>/]<Module>.module.yaml
    <module base>/DSCResources/<Resource>/<Resource>.resource.yaml

Directories without a module manifest may still carry resource descriptors,
either under ``DSCResources/`` or directly in the directory; those records are
reported without module provenance.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from dsc_adapter.constants.discovery import RESOURCES_DIRNAME
from dsc_adapter.discovery.manifest import (
    ModuleRecord,
    is_resource_manifest,
    module_manifest_path,
    read_module_manifest,
    read_resource_manifest,
)
from dsc_adapter.exceptions import ManifestError

logger = logging.getLogger(__name__)


class ResourceEnumerator(Protocol):
    """Source of installed modules and raw resource records."""

    def modules(self) -> list[ModuleRecord]:
        """Return every installed module version."""
        ...

    def resources(self, module: ModuleRecord) -> list[dict[str, Any]]:
        """Return raw resource records shipped by *module*, stamped with its provenance."""
        ...

    def loose_resources(self) -> list[dict[str, Any]]:
        """Return raw resource records that belong to no module manifest."""
        ...

    def search_directories(self) -> frozenset[str]:
        """Return the live set of plugin-search directories."""
        ...


def list_search_directories(module_paths: tuple[Path, ...]) -> frozenset[str]:
    """Return every directory one or two levels below each module path."""
    found: set[str] = set()
    for root in module_paths:
        for child in _child_dirs(root):
            found.add(str(child))
            found.update(str(grandchild) for grandchild in _child_dirs(child))
    return frozenset(found)


class FilesystemEnumerator:
    """Reads YAML module manifests and resource descriptors from module paths."""

    def __init__(self, module_paths: tuple[Path, ...]) -> None:
        self.module_paths = module_paths

    def search_directories(self) -> frozenset[str]:
        return list_search_directories(self.module_paths)

    def modules(self) -> list[ModuleRecord]:
        records: list[ModuleRecord] = []
        for module_dir in self._module_dirs():
            for manifest in self._manifests_for(module_dir):
                try:
                    records.append(read_module_manifest(manifest))
                except ManifestError as exc:
                    logger.warning("Skipping module manifest: %s", exc)
        return records

    def resources(self, module: ModuleRecord) -> list[dict[str, Any]]:
        provenance = {
            "module_name": module.name,
            "version": module.version,
            "company_name": module.company_name,
            "author": module.author,
        }
        records = self._descriptors_under(module.base_path / RESOURCES_DIRNAME, nested=True)
        for record in records:
            for key, value in provenance.items():
                if not record.get(key):
                    record[key] = value
        return records

    def loose_resources(self) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for module_dir in self._module_dirs():
            if self._manifests_for(module_dir):
                continue
            records.extend(self._descriptors_under(module_dir / RESOURCES_DIRNAME, nested=True))
            records.extend(self._descriptors_under(module_dir, nested=False))
        return records

    def _module_dirs(self) -> list[Path]:
        return [child for root in self.module_paths for child in _child_dirs(root)]

    def _manifests_for(self, module_dir: Path) -> list[Path]:
        candidates = [module_manifest_path(module_dir, module_dir.name)]
        candidates.extend(module_manifest_path(version_dir, module_dir.name) for version_dir in _child_dirs(module_dir))
        return [path for path in candidates if path.is_file()]

    def _descriptors_under(self, directory: Path, *, nested: bool) -> list[dict[str, Any]]:
        if nested:
            candidates = [path for child in _child_dirs(directory) for path in _entries_of(child)]
        else:
            candidates = _entries_of(directory) if directory.is_dir() else []

        records: list[dict[str, Any]] = []
        for path in candidates:
            if not is_resource_manifest(path):
                continue
            try:
                records.append(read_resource_manifest(path))
            except ManifestError as exc:
                logger.warning("Skipping resource manifest: %s", exc)
        return records


def _child_dirs(directory: Path) -> list[Path]:
    try:
        return sorted(child for child in directory.iterdir() if child.is_dir())
    except OSError:
        return []


def _entries_of(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Skipping unreadable resource directory %s: %s", directory, exc)
        return []
