"""Core data models: cache document, resource metadata and request/result envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dsc_adapter.types import (
    CacheEntryPayload,
    CachePayload,
    ImplementationKind,
    JsonObject,
    ResourceInfoPayload,
)

_INFO_TEXT_FIELDS: tuple[str, ...] = (
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


@dataclass(frozen=True)
class ResourceInfo:
    """Metadata describing one discovered resource.

    Unset textual fields are empty strings, never ``None``.
    """

    kind: ImplementationKind | str
    name: str
    module_name: str = ""
    version: str = ""
    friendly_name: str = ""
    resource_type: str = ""
    company_name: str = ""
    author: str = ""
    description: str = ""
    path: str = ""
    parent_path: str = ""
    implemented_as: str = ""
    properties: tuple[str, ...] = ()
    capabilities: tuple[str, ...] = ()

    def to_dict(self) -> ResourceInfoPayload:
        """Serialize to the persisted payload shape."""
        return {
            "kind": self.kind,
            "name": self.name,
            "friendly_name": self.friendly_name,
            "resource_type": self.resource_type,
            "module_name": self.module_name,
            "version": self.version,
            "company_name": self.company_name,
            "author": self.author,
            "description": self.description,
            "path": self.path,
            "parent_path": self.parent_path,
            "implemented_as": self.implemented_as,
            "properties": list(self.properties),
            "capabilities": list(self.capabilities),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> ResourceInfo:
        """Build from a persisted payload; raises ``ValueError`` when malformed."""
        kind = payload.get("kind")
        if not isinstance(kind, str) or not kind:
            raise ValueError("resource info is missing 'kind'")
        values: dict[str, str] = {}
        for name in _INFO_TEXT_FIELDS:
            value = payload.get(name, "")
            if not isinstance(value, str):
                raise ValueError(f"resource info field {name!r} must be a string")
            values[name] = value
        return cls(
            kind=kind,
            properties=_string_tuple(payload.get("properties"), "properties"),
            capabilities=_string_tuple(payload.get("capabilities"), "capabilities"),
            **values,
        )


@dataclass(frozen=True)
class CacheEntry:
    """A cached resource keyed by ``<module>/<resource>`` plus its freshness witnesses."""

    type_key: str
    info: ResourceInfo
    tracked_files: dict[str, int] = field(default_factory=dict)

    @property
    def module_name(self) -> str:
        return self.type_key.split("/", 1)[0]

    def to_dict(self) -> CacheEntryPayload:
        return {
            "type": self.type_key,
            "info": self.info.to_dict(),
            "tracked_files": dict(sorted(self.tracked_files.items())),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> CacheEntry:
        type_key = payload.get("type")
        info = payload.get("info")
        tracked = payload.get("tracked_files", {})
        if not isinstance(type_key, str) or "/" not in type_key:
            raise ValueError("cache entry type must look like '<module>/<resource>'")
        if not isinstance(info, dict):
            raise ValueError("cache entry info must be a mapping")
        if not isinstance(tracked, dict):
            raise ValueError("cache entry tracked_files must be a mapping")
        tracked_files: dict[str, int] = {}
        for path, mtime_ns in tracked.items():
            if not isinstance(path, str) or isinstance(mtime_ns, bool) or not isinstance(mtime_ns, int):
                raise ValueError(f"invalid tracked file record for {path!r}")
            tracked_files[path] = mtime_ns
        return cls(type_key=type_key, info=ResourceInfo.from_dict(info), tracked_files=tracked_files)


@dataclass(frozen=True)
class CacheDocument:
    """Versioned discovery cache, replaced as a whole on every rebuild."""

    schema_version: int
    search_paths: frozenset[str] = frozenset()
    entries: tuple[CacheEntry, ...] = ()

    def to_dict(self) -> CachePayload:
        return {
            "schema_version": self.schema_version,
            "search_paths": sorted(self.search_paths),
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class DesiredStateRequest:
    """One resource invocation request."""

    name: str
    type: str
    properties: JsonObject = field(default_factory=dict)

    def to_dict(self) -> JsonObject:
        return {"name": self.name, "type": self.type, "properties": dict(self.properties)}


@dataclass(frozen=True)
class ActualStateResult:
    """One resource invocation result; same shape as the request envelope."""

    name: str
    type: str
    properties: JsonObject = field(default_factory=dict)

    def to_dict(self) -> JsonObject:
        return {"name": self.name, "type": self.type, "properties": dict(self.properties)}


def _string_tuple(value: object, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"resource info field {field_name!r} must be a list of strings")
    return tuple(value)
