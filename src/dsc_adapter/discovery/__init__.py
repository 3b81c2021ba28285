"""Resource discovery from installed modules."""

from __future__ import annotations

from dsc_adapter.discovery.discoverer import ResourceDiscoverer, select_latest_modules
from dsc_adapter.discovery.enumerator import FilesystemEnumerator, ResourceEnumerator, list_search_directories
from dsc_adapter.discovery.manifest import ModuleRecord

__all__ = [
    "FilesystemEnumerator",
    "ModuleRecord",
    "ResourceDiscoverer",
    "ResourceEnumerator",
    "list_search_directories",
    "select_latest_modules",
]
