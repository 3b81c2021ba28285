"""Shared type aliases."""

from .cache import CacheEntryPayload, CachePayload, ResourceInfoPayload
from .common import ImplementationKind, JsonObject, JsonScalar, JsonValue, Operation, PlatformFamily

__all__ = [
    "CacheEntryPayload",
    "CachePayload",
    "ImplementationKind",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Operation",
    "PlatformFamily",
    "ResourceInfoPayload",
]
