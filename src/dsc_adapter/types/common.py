"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Operation: TypeAlias = Literal["Get", "Set", "Test", "Export"]
PlatformFamily: TypeAlias = Literal["windows", "linux", "macos"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
ImplementationKind: TypeAlias = Literal["ScriptBased", "ClassBased", "Binary", "Composite"]
