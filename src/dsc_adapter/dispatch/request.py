"""Turn engine input JSON into desired-state requests."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from dsc_adapter.constants.dispatch import (
    ADAPTED_TYPE_FIELD,
    CONFIGURATION_CONTEXT,
    ENGINE_METADATA_KEY,
)
from dsc_adapter.exceptions import RequestError
from dsc_adapter.model import DesiredStateRequest


def parse_requests(raw_json: str, *, adapter_name: str) -> list[DesiredStateRequest]:
    """Parse a configuration document or a bare single-resource object.

    A configuration document carries ``metadata["Microsoft.DSC"]["context"] ==
    "Configuration"`` and each ``resources`` item becomes a request. Anything
    else is a bare resource: its ``adapted_dsc_type`` is the request type, the
    remaining fields are the properties and *adapter_name* is the name.
    """
    try:
        payload = json.loads(raw_json.lstrip("\ufeff")) if raw_json.strip() else {}
    except json.JSONDecodeError as exc:
        raise RequestError(f"Failed to create configuration object from provided input JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise RequestError("Input JSON must be an object")

    if is_configuration_document(payload):
        return _configuration_requests(payload)

    body = dict(payload)
    resource_type = body.pop(ADAPTED_TYPE_FIELD, None)
    if not isinstance(resource_type, str) or not resource_type.strip():
        raise RequestError(f"Input JSON for a single resource must set '{ADAPTED_TYPE_FIELD}'")
    return [DesiredStateRequest(name=adapter_name, type=resource_type, properties=body)]


def is_configuration_document(payload: dict[str, Any]) -> bool:
    """Return True only when the engine's configuration context marker is present."""
    metadata = payload.get("metadata")
    if not isinstance(metadata, dict):
        return False
    engine = metadata.get(ENGINE_METADATA_KEY)
    return isinstance(engine, dict) and engine.get("context") == CONFIGURATION_CONTEXT


def requested_modules(requests: Iterable[DesiredStateRequest]) -> frozenset[str]:
    """Return the module part of every requested ``<module>/<resource>`` type."""
    return frozenset(request.type.split("/", 1)[0] for request in requests)


def _configuration_requests(payload: dict[str, Any]) -> list[DesiredStateRequest]:
    resources = payload.get("resources")
    if not isinstance(resources, list):
        raise RequestError("Configuration input must contain a 'resources' list")

    requests: list[DesiredStateRequest] = []
    for index, item in enumerate(resources):
        if not isinstance(item, dict):
            raise RequestError(f"resources[{index}] must be an object")
        resource_type = item.get("type")
        if not isinstance(resource_type, str) or not resource_type:
            raise RequestError(f"resources[{index}] is missing a 'type'")
        name = item.get("name")
        properties = item.get("properties")
        if properties is None:
            properties = {}
        if not isinstance(properties, dict):
            raise RequestError(f"resources[{index}].properties must be an object")
        requests.append(
            DesiredStateRequest(
                name=name if isinstance(name, str) else "",
                type=resource_type,
                properties=properties,
            )
        )
    if not requests:
        raise RequestError("Could not get list of resource types from provided JSON")
    return requests
