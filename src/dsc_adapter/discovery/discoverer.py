"""Resource discovery: enumerate, resolve provenance, dedupe and record tracked files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dsc_adapter.constants.discovery import (
    BUILTIN_COMPANY_NAME,
    BUILTIN_CONFIGURATION_SUBPATH,
    BUILTIN_MODULE_NAME,
    BUILTIN_MODULE_SUBPATHS,
    BUILTIN_MODULE_VERSION,
    DEFAULT_CAPABILITIES,
    KIND_BINARY,
    LEGACY_RUNTIME_SUBPATH,
    TRACKED_FILE_SUFFIXES,
    VALID_KINDS,
)
from dsc_adapter.discovery.enumerator import ResourceEnumerator
from dsc_adapter.discovery.manifest import ModuleRecord
from dsc_adapter.io import iter_tracked_files
from dsc_adapter.model import CacheEntry, ResourceInfo
from dsc_adapter.runtime import RuntimeInfo
from dsc_adapter.tracing import TRACE
from dsc_adapter.utils import version_key

logger = logging.getLogger(__name__)

_TEXT_FIELDS: tuple[str, ...] = (
    "kind",
    "name",
    "friendly_name",
    "resource_type",
    "module_name",
    "version",
    "company_name",
    "author",
    "description",
    "path",
    "parent_path",
    "implemented_as",
)


def select_latest_modules(modules: Iterable[ModuleRecord]) -> dict[str, ModuleRecord]:
    """Group modules by name and keep the highest version of each."""
    latest: dict[str, ModuleRecord] = {}
    for module in modules:
        current = latest.get(module.name)
        if current is None or version_key(module.version) > version_key(current.version):
            latest[module.name] = module
    return latest


class ResourceDiscoverer:
    """Builds cache entries for every usable installed resource."""

    def __init__(self, enumerator: ResourceEnumerator, runtime: RuntimeInfo) -> None:
        self.enumerator = enumerator
        self.runtime = runtime

    def discover(self, requested_modules: Iterable[str] = ()) -> list[CacheEntry]:
        """Return one entry per ``<module>/<resource>`` type key.

        With *requested_modules*, only resources of those modules are returned.
        Requesting only the built-in module selects the module-less resources
        that ship in the platform module directories or the platform
        configuration directory, all of which resolve to the built-in module.
        """
        requested = frozenset(requested_modules)
        all_modules = self.enumerator.modules()
        latest = select_latest_modules(all_modules)
        builtin_only = requested == {BUILTIN_MODULE_NAME}

        raw_records: list[dict[str, Any]] = []
        for name, module in sorted(latest.items()):
            if requested and name not in requested:
                continue
            logger.log(TRACE, "Enumerating resources of module %s %s", name, module.version)
            raw_records.extend(self.enumerator.resources(module))
        if builtin_only:
            raw_records.extend(
                record
                for record in self.enumerator.loose_resources()
                if not record.get("module_name") and self._is_builtin_location(_text(record.get("parent_path")))
            )
        else:
            raw_records.extend(self.enumerator.loose_resources())

        entries: dict[str, CacheEntry] = {}
        for raw in raw_records:
            entry = self._build_entry(raw, latest)
            if entry is None:
                continue
            if requested and entry.module_name not in requested:
                continue
            existing = entries.get(entry.type_key)
            if existing is not None and version_key(entry.info.version) <= version_key(existing.info.version):
                logger.debug("Ignoring duplicate resource %s %s", entry.type_key, entry.info.version)
                continue
            entries[entry.type_key] = entry

        logger.debug("Discovered %d resource(s)", len(entries))
        return list(entries.values())

    def _build_entry(self, raw: dict[str, Any], latest: dict[str, ModuleRecord]) -> CacheEntry | None:
        fields = {name: _text(raw.get(name)) for name in _TEXT_FIELDS}
        parent_path = fields["parent_path"]

        if not self.runtime.is_legacy and self._under_system_path(parent_path, LEGACY_RUNTIME_SUBPATH):
            logger.debug("Skipping legacy-runtime resource '%s' at %s", fields["name"], parent_path)
            return None

        if not fields["module_name"]:
            if self._is_builtin_location(parent_path):
                fields["module_name"] = BUILTIN_MODULE_NAME
                fields["company_name"] = BUILTIN_COMPANY_NAME
                fields["version"] = BUILTIN_MODULE_VERSION
                if self.runtime.is_legacy and fields["implemented_as"] == KIND_BINARY:
                    fields["kind"] = KIND_BINARY
            elif parent_path:
                # <Module>/DSCResources/<Resource>
                fields["module_name"] = Path(parent_path).parent.parent.name
                module = latest.get(fields["module_name"])
                if module is not None:
                    fields["version"] = module.version

        if fields["kind"] not in VALID_KINDS:
            logger.warning(
                "Skipping resource '%s': unrecognized implementation kind '%s'",
                fields["name"],
                fields["kind"],
            )
            return None

        if not fields["name"] or not fields["module_name"]:
            logger.warning("Skipping resource without a resolvable name at '%s'", parent_path)
            return None

        module = latest.get(fields["module_name"])
        if not fields["description"] and module is not None and module.description:
            # Long multi-line module descriptions are reduced to their first line.
            fields["description"] = module.description.splitlines()[0]
        capabilities = module.capabilities if module is not None and module.capabilities else DEFAULT_CAPABILITIES

        info = ResourceInfo(
            properties=tuple(str(item) for item in raw.get("properties") or ()),
            capabilities=tuple(capabilities),
            **fields,
        )
        tracked = dict(iter_tracked_files(Path(parent_path), TRACKED_FILE_SUFFIXES)) if parent_path else {}
        return CacheEntry(type_key=f"{info.module_name}/{info.name}", info=info, tracked_files=tracked)

    def _is_builtin_module_path(self, parent_path: str) -> bool:
        if not parent_path or not self.runtime.windir:
            return False
        candidate = self._normalize(parent_path)
        return any(
            candidate == self._normalize(os.path.join(self.runtime.windir, *subpath))
            for subpath in BUILTIN_MODULE_SUBPATHS
        )

    def _is_builtin_location(self, parent_path: str) -> bool:
        return self._is_builtin_module_path(parent_path) or self._under_system_path(
            parent_path, BUILTIN_CONFIGURATION_SUBPATH
        )

    def _under_system_path(self, parent_path: str, subpath: tuple[str, ...]) -> bool:
        if not parent_path or not self.runtime.windir:
            return False
        prefix = self._normalize(os.path.join(self.runtime.windir, *subpath))
        candidate = self._normalize(parent_path)
        return candidate == prefix or candidate.startswith(prefix + os.sep)

    def _normalize(self, path: str) -> str:
        normalized = os.path.normpath(path)
        # Windows paths compare case-insensitively.
        return normalized.lower() if self.runtime.is_windows else normalized


def _text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
