"""Request parsing, invocation dispatch and result normalization."""

from __future__ import annotations

from dsc_adapter.dispatch.dispatcher import Dispatcher, find_entry
from dsc_adapter.dispatch.normalizer import InstanceResult, MappingResult, ProviderResult, classify_result, normalize
from dsc_adapter.dispatch.request import is_configuration_document, parse_requests, requested_modules

__all__ = [
    "Dispatcher",
    "InstanceResult",
    "MappingResult",
    "ProviderResult",
    "classify_result",
    "find_entry",
    "is_configuration_document",
    "normalize",
    "parse_requests",
    "requested_modules",
]
