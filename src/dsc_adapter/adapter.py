"""Adapter operations: List, Get/Set/Test/Export, Validate and ClearCache.

Every operation that needs resource metadata goes through ``refresh_cache``,
which loads the persisted discovery cache, checks it for staleness, rebuilds it
when needed and persists the result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dsc_adapter.cache import CacheStore, StalenessDetector
from dsc_adapter.config import AdapterConfig
from dsc_adapter.constants.cache import CACHE_SCHEMA_VERSION
from dsc_adapter.constants.dispatch import IN_DESIRED_STATE_FIELD, OPERATION_TEST, TEST_SUMMARY_FIELD
from dsc_adapter.discovery import FilesystemEnumerator, ResourceDiscoverer, ResourceEnumerator
from dsc_adapter.dispatch import Dispatcher, find_entry, parse_requests, requested_modules
from dsc_adapter.exceptions import ResourceNotFoundError
from dsc_adapter.io import dumps_compact
from dsc_adapter.model import ActualStateResult, CacheDocument, CacheEntry
from dsc_adapter.providers import ProviderRegistry, ResourceExecutor, ScriptFileExecutor, SourceFileTypeLoader
from dsc_adapter.types import JsonObject, Operation

logger = logging.getLogger(__name__)


class Adapter:
    """Operation surface bound to one resolved ``AdapterConfig``.

    *executor* and *registry* default to the file-backed implementations built
    from the current cache entries.
    """

    def __init__(
        self,
        config: AdapterConfig,
        *,
        enumerator: ResourceEnumerator | None = None,
        executor: ResourceExecutor | None = None,
        registry: ProviderRegistry | None = None,
    ) -> None:
        self.config = config
        self.enumerator = enumerator if enumerator is not None else FilesystemEnumerator(config.module_paths)
        self.store = CacheStore(config.cache_path, schema_version=CACHE_SCHEMA_VERSION)
        self.detector = StalenessDetector(
            schema_version=CACHE_SCHEMA_VERSION,
            search_path_lister=self.enumerator.search_directories,
        )
        self.discoverer = ResourceDiscoverer(self.enumerator, config.runtime)
        self._executor = executor
        self._registry = registry

    def refresh_cache(self, modules: Iterable[str] = ()) -> list[CacheEntry]:
        """Return usable cache entries, rebuilding and persisting them when stale.

        A rebuild filtered to *modules* keeps the cached entries of every other
        module and the previously recorded search paths, so search-path drift
        still forces a full rebuild later. Without a usable document the
        rebuild always covers every module, since the saved document is what
        unfiltered List and Export trust.
        """
        requested = frozenset(modules)
        document = self.store.load() if self.config.use_cache else None
        if document is not None and not self.detector.is_stale(document, requested):
            logger.debug("Using %d cached resource(s)", len(document.entries))
            return list(document.entries)

        if requested and document is None and self.config.use_cache:
            logger.debug("No usable discovery cache, discovering every module")
            requested = frozenset()

        logger.debug("Constructing discovery cache")
        entries = self.discoverer.discover(requested)
        search_paths = self.enumerator.search_directories()
        if requested and document is not None:
            kept = [entry for entry in document.entries if entry.module_name not in requested]
            entries = kept + entries
            search_paths = document.search_paths

        rebuilt = CacheDocument(
            schema_version=CACHE_SCHEMA_VERSION,
            search_paths=search_paths,
            entries=tuple(entries),
        )
        if self.config.use_cache:
            self.store.save(rebuilt)
        logger.debug("Discovery cache holds %d resource(s)", len(entries))
        return entries

    def list_resources(self) -> list[JsonObject]:
        """Describe every cached resource in the engine's list format."""
        entries = sorted(self.refresh_cache(), key=lambda entry: entry.type_key.lower())
        return [self._describe(entry) for entry in entries]

    def invoke(self, operation: Operation, input_json: str) -> JsonObject:
        """Run *operation* for every request in *input_json*.

        All requested types are resolved before any provider is called, and the
        first failure aborts the operation without partial output.
        """
        requests = parse_requests(input_json, adapter_name=self.config.runtime.adapter_type)
        entries = self.refresh_cache(requested_modules(requests))

        for request in requests:
            if find_entry(entries, request.type) is None:
                raise ResourceNotFoundError(request.type, input_json.strip())

        dispatcher = Dispatcher(self.config.runtime, self._executor_for(entries), self._registry_for(entries))
        results: list[ActualStateResult] = []
        for request in requests:
            results.extend(dispatcher.invoke(operation, request, entries))

        payload: JsonObject = {"result": [result.to_dict() for result in results]}
        if operation == OPERATION_TEST:
            payload[TEST_SUMMARY_FIELD] = all(
                result.properties.get(IN_DESIRED_STATE_FIELD) is not False for result in results
            )
        logger.debug("%s result: %s", operation, dumps_compact(payload))
        return payload

    def validate(self) -> JsonObject:
        """Report the adapter configuration as valid; no per-resource checks are made."""
        return {"valid": True}

    def clear_cache(self) -> bool:
        """Delete the persisted cache file, returning whether one existed."""
        return self.store.clear()

    def _describe(self, entry: CacheEntry) -> JsonObject:
        info = entry.info
        return {
            "type": entry.type_key,
            "kind": "resource",
            "version": info.version,
            "capabilities": list(info.capabilities),
            "path": info.path,
            "directory": info.parent_path,
            "implementedAs": info.kind,
            "author": info.author,
            "properties": list(info.properties),
            "requireAdapter": self.config.runtime.adapter_type,
            "description": info.description,
        }

    def _executor_for(self, entries: list[CacheEntry]) -> ResourceExecutor:
        return self._executor if self._executor is not None else ScriptFileExecutor(entries)

    def _registry_for(self, entries: list[CacheEntry]) -> ProviderRegistry:
        if self._registry is not None:
            return self._registry
        registry = ProviderRegistry(fallback=SourceFileTypeLoader(entries))
        registry.load_entry_points()
        return registry
