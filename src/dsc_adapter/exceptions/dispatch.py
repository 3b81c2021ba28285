"""Fatal invocation errors raised by the dispatcher."""

from __future__ import annotations

from dsc_adapter.exceptions.base import AdapterError


class ResourceNotFoundError(AdapterError, LookupError):
    """Raised when no cache entry matches the requested resource type."""

    def __init__(self, resource_type: str, request_json: str = "") -> None:
        self.resource_type = resource_type
        message = f'Can not find type "{resource_type}"'
        if request_json:
            message += f' for resource "{request_json}"'
        super().__init__(f"{message}. Please ensure that discovery returns this resource type.")


class UnsupportedPlatformError(AdapterError):
    """Raised when an implementation kind cannot run on the current platform or runtime."""


class ProviderError(AdapterError):
    """Raised when the delegated resource logic fails; wraps the provider message verbatim."""


class UnrecognizedImplementationError(AdapterError):
    """Raised for implementation kinds this adapter never executes."""
