"""Typed cache payload structures as persisted on disk."""

from __future__ import annotations

from typing import TypedDict


class ResourceInfoPayload(TypedDict):
    """Serialized resource metadata."""

    kind: str
    name: str
    friendly_name: str
    resource_type: str
    module_name: str
    version: str
    company_name: str
    author: str
    description: str
    path: str
    parent_path: str
    implemented_as: str
    properties: list[str]
    capabilities: list[str]


class CacheEntryPayload(TypedDict):
    """Serialized cache entry."""

    type: str
    info: ResourceInfoPayload
    tracked_files: dict[str, int]


class CachePayload(TypedDict):
    """Top-level cache payload persisted to disk."""

    schema_version: int
    search_paths: list[str]
    entries: list[CacheEntryPayload]
