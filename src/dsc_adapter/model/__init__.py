"""Core data models."""

from .entities import (
    ActualStateResult,
    CacheDocument,
    CacheEntry,
    DesiredStateRequest,
    ResourceInfo,
)

__all__ = [
    "ActualStateResult",
    "CacheDocument",
    "CacheEntry",
    "DesiredStateRequest",
    "ResourceInfo",
]
