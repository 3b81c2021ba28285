"""Route desired-state requests to the execution strategy of their resource kind."""

from __future__ import annotations

import logging
import platform
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from dsc_adapter.constants.discovery import KIND_BINARY, KIND_CLASS, KIND_SCRIPT
from dsc_adapter.constants.dispatch import (
    BINARY_RESOURCE_ALLOWLIST,
    IN_DESIRED_STATE_FIELD,
    OPERATION_EXPORT,
    OPERATION_GET,
    OPERATION_SET,
    OPERATION_TEST,
)
from dsc_adapter.dispatch.normalizer import normalize
from dsc_adapter.exceptions import (
    ProviderError,
    ResourceNotFoundError,
    UnrecognizedImplementationError,
    UnsupportedPlatformError,
)
from dsc_adapter.io import dumps_compact
from dsc_adapter.model import ActualStateResult, CacheEntry, DesiredStateRequest, ResourceInfo
from dsc_adapter.providers import ProviderRegistry, ResourceExecutor
from dsc_adapter.runtime import RuntimeInfo
from dsc_adapter.types import JsonObject, Operation

logger = logging.getLogger(__name__)


def find_entry(entries: Iterable[CacheEntry], resource_type: str) -> CacheEntry | None:
    """Return the cache entry whose type key equals *resource_type*."""
    return next((entry for entry in entries if entry.type_key == resource_type), None)


class Dispatcher:
    """Invokes Get/Set/Test/Export against resolved cache entries.

    Every failure raises; nothing is retried.
    """

    def __init__(self, runtime: RuntimeInfo, executor: ResourceExecutor, registry: ProviderRegistry) -> None:
        self.runtime = runtime
        self.executor = executor
        self.registry = registry

    def invoke(
        self,
        operation: Operation,
        request: DesiredStateRequest,
        entries: Iterable[CacheEntry],
    ) -> list[ActualStateResult]:
        """Run *operation* for *request*.

        Returns exactly one result, except Export which returns one result
        per exported instance.
        """
        logger.debug("OS version: %s", platform.platform())
        logger.debug("Runtime: %s, major version %d", self.runtime.platform_family, self.runtime.major_version)

        entry = find_entry(entries, request.type)
        if entry is None:
            raise ResourceNotFoundError(request.type, dumps_compact(request.to_dict()))

        info = entry.info
        if info.kind == KIND_SCRIPT:
            return self._invoke_script(operation, request, info)
        if info.kind == KIND_CLASS:
            return self._invoke_class(operation, request, info)
        if info.kind == KIND_BINARY:
            return self._invoke_binary(operation, request, info)
        raise UnrecognizedImplementationError(f"Can not find implementation of type: {info.kind}")

    def _invoke_script(
        self,
        operation: Operation,
        request: DesiredStateRequest,
        info: ResourceInfo,
    ) -> list[ActualStateResult]:
        if not self.runtime.is_windows:
            raise UnsupportedPlatformError("Script based resources are only supported on Windows.")

        properties = dict(request.properties)
        if operation == OPERATION_GET:
            # Script resources do not validate their own Get parameters.
            accepted = _call_provider(self.executor.accepted_parameters, OPERATION_GET, info.name, info.module_name)
            if accepted is not None:
                for name in sorted(set(properties) - accepted):
                    logger.debug("Removing property '%s' not accepted by Get of %s", name, request.type)
                    del properties[name]
        return self._delegate(operation, request, info, properties)

    def _invoke_binary(
        self,
        operation: Operation,
        request: DesiredStateRequest,
        info: ResourceInfo,
    ) -> list[ActualStateResult]:
        if not (self.runtime.is_windows and self.runtime.is_legacy):
            raise UnsupportedPlatformError(
                "To use a binary resource such as File, Log, or SignatureValidation, "
                "use the Microsoft.Windows/WindowsPowerShell adapter."
            )
        if info.implemented_as != KIND_BINARY or info.name not in BINARY_RESOURCE_ALLOWLIST:
            raise UnsupportedPlatformError("Only File, Log, and SignatureValidation are supported as Binary resources.")
        return self._delegate(operation, request, info, dict(request.properties))

    def _delegate(
        self,
        operation: Operation,
        request: DesiredStateRequest,
        info: ResourceInfo,
        properties: JsonObject,
    ) -> list[ActualStateResult]:
        logger.debug("Module: %s, Name: %s, Property: %s", info.module_name, info.name, dumps_compact(properties))
        raw = _call_provider(self.executor.execute, operation, info.name, info.module_name, properties)
        if operation == OPERATION_TEST and isinstance(raw, bool):
            return [_result(request, {IN_DESIRED_STATE_FIELD: raw})]
        if operation == OPERATION_EXPORT and isinstance(raw, list | tuple):
            return [_result(request, normalize(item)) for item in raw]
        return [_result(request, normalize(raw))]

    def _invoke_class(
        self,
        operation: Operation,
        request: DesiredStateRequest,
        info: ResourceInfo,
    ) -> list[ActualStateResult]:
        def run() -> list[ActualStateResult]:
            provider_type = self.registry.load_type(info.module_name, info.name)
            instance = provider_type()
            for name, value in request.properties.items():
                setattr(instance, name, value)

            if operation == OPERATION_EXPORT:
                return [_result(request, normalize(item)) for item in instance.export()]
            if operation == OPERATION_GET:
                return [_result(request, normalize(instance.get()))]
            if operation == OPERATION_SET:
                instance.set()
                return [_result(request, normalize(instance))]
            if operation == OPERATION_TEST:
                return [_result(request, {IN_DESIRED_STATE_FIELD: bool(instance.test())})]
            raise UnrecognizedImplementationError(f"Unsupported operation '{operation}'")

        return _call_provider(run)


def _result(request: DesiredStateRequest, properties: JsonObject) -> ActualStateResult:
    return ActualStateResult(name=request.name, type=request.type, properties=properties)


T = TypeVar("T")


def _call_provider(function: Callable[..., T], *args: Any) -> T:
    """Call into provider code, relaying any failure as ``ProviderError``."""
    try:
        return function(*args)
    except (ProviderError, UnrecognizedImplementationError):
        raise
    except Exception as exc:
        raise ProviderError(str(exc) or type(exc).__name__) from exc
