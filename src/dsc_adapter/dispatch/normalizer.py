"""Collapse provider result shapes into result properties."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from dsc_adapter.constants.dispatch import RESULT_METADATA_DENYLIST
from dsc_adapter.exceptions import ProviderError
from dsc_adapter.types import JsonObject


@dataclass(frozen=True)
class MappingResult:
    """Plain key/value result, used as-is."""

    fields: dict[str, Any]
    shape: Literal["map"] = "map"


@dataclass(frozen=True)
class InstanceResult:
    """Object-shaped result that may carry provider-internal metadata fields."""

    fields: dict[str, Any]
    type_name: str
    shape: Literal["instance"] = "instance"


ProviderResult: TypeAlias = MappingResult | InstanceResult


def classify_result(raw: object) -> ProviderResult:
    """Tag a raw provider result with its shape."""
    if raw is None:
        return MappingResult(fields={})
    if isinstance(raw, Mapping):
        return MappingResult(fields={str(key): value for key, value in raw.items()})
    if dataclasses.is_dataclass(raw) and not isinstance(raw, type):
        fields = {field.name: getattr(raw, field.name) for field in dataclasses.fields(raw)}
        return InstanceResult(fields=fields, type_name=type(raw).__name__)
    if hasattr(raw, "__dict__"):
        return InstanceResult(fields=dict(vars(raw)), type_name=type(raw).__name__)

    slot_names = [name for cls in type(raw).__mro__ for name in getattr(cls, "__slots__", ())]
    if slot_names:
        fields = {name: getattr(raw, name) for name in slot_names if hasattr(raw, name)}
        return InstanceResult(fields=fields, type_name=type(raw).__name__)

    raise ProviderError(f"Unsupported provider result of type {type(raw).__name__}")


def normalize(raw: object) -> JsonObject:
    """Return canonical result properties for *raw*."""
    result = classify_result(raw)
    if isinstance(result, MappingResult):
        return dict(result.fields)
    return {
        name: value
        for name, value in result.fields.items()
        if name not in RESULT_METADATA_DENYLIST and not name.startswith("_")
    }
