"""Capability protocols the dispatcher calls through."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from dsc_adapter.types import JsonObject, Operation


class ResourceExecutor(Protocol):
    """Executes script-style and native resources by name."""

    def execute(self, method: Operation, name: str, module: str, properties: JsonObject) -> object:
        """Run *method* of resource *module*/*name* with *properties*; may raise anything."""
        ...

    def accepted_parameters(self, method: Operation, name: str, module: str) -> frozenset[str] | None:
        """Return parameter names *method* accepts, or ``None`` when it accepts any."""
        ...


class ClassResource(Protocol):
    """Instance interface of class-style resources.

    Instances are built with no arguments and configured through attribute
    assignment before any method runs. ``export`` returns every instance the
    resource can enumerate.
    """

    def get(self) -> Any: ...

    def set(self) -> Any: ...

    def test(self) -> bool: ...

    def export(self) -> Iterable[Any]: ...
