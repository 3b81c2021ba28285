"""Default executor for file-backed script resources.

A script resource is a Python source file exposing ``get_target_resource``,
``set_target_resource``, ``test_target_resource`` and optionally
``export_target_resource``; each receives the requested properties as keyword
arguments. Export may return a list with one mapping per exported instance.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from dsc_adapter.constants.dispatch import SCRIPT_METHOD_NAMES
from dsc_adapter.exceptions import ProviderError
from dsc_adapter.model import CacheEntry
from dsc_adapter.providers.loading import import_source_file
from dsc_adapter.types import JsonObject, Operation

logger = logging.getLogger(__name__)


class ScriptFileExecutor:
    """Resolves resources to their source files through the cache entries."""

    def __init__(self, entries: Iterable[CacheEntry]) -> None:
        self._paths = {(entry.info.module_name, entry.info.name): Path(entry.info.path) for entry in entries}

    def execute(self, method: Operation, name: str, module: str, properties: JsonObject) -> object:
        function = self._function(method, name, module)
        logger.debug("Invoking %s of %s/%s", function.__name__, module, name)
        return function(**properties)

    def accepted_parameters(self, method: Operation, name: str, module: str) -> frozenset[str] | None:
        function = self._function(method, name, module)
        parameters = inspect.signature(function).parameters.values()
        if any(parameter.kind is inspect.Parameter.VAR_KEYWORD for parameter in parameters):
            return None
        return frozenset(
            parameter.name
            for parameter in parameters
            if parameter.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
        )

    def _function(self, method: Operation, name: str, module: str) -> Callable[..., Any]:
        path = self._paths.get((module, name))
        if path is None:
            raise ProviderError(f"No source file known for resource '{module}/{name}'")
        if path.suffix != ".py":
            raise ProviderError(f"Resource '{module}/{name}' is not backed by a Python source file: {path}")

        function_name = SCRIPT_METHOD_NAMES[method]
        function = getattr(import_source_file(path), function_name, None)
        if not callable(function):
            raise ProviderError(f"Resource '{module}/{name}' does not implement {function_name}")
        return function
