"""Tests for input JSON parsing."""

from __future__ import annotations

import json

import pytest

from dsc_adapter.dispatch import is_configuration_document, parse_requests, requested_modules
from dsc_adapter.exceptions import RequestError

ADAPTER = "Microsoft.DSC/PowerShell"


def _configuration(*resources: dict[str, object]) -> str:
    return json.dumps(
        {
            "metadata": {"Microsoft.DSC": {"context": "Configuration"}},
            "resources": list(resources),
        }
    )


def test_bare_resource_uses_adapted_type_and_adapter_name() -> None:
    requests = parse_requests('{"adapted_dsc_type": "Demo/Thing", "Name": "x"}', adapter_name=ADAPTER)

    assert len(requests) == 1
    assert requests[0].name == ADAPTER
    assert requests[0].type == "Demo/Thing"
    assert requests[0].properties == {"Name": "x"}


def test_configuration_document_yields_one_request_per_resource() -> None:
    raw = _configuration(
        {"name": "first", "type": "Demo/Thing", "properties": {"Name": "a"}},
        {"name": "second", "type": "Tools/Widget"},
    )

    requests = parse_requests(raw, adapter_name=ADAPTER)

    assert [(r.name, r.type, r.properties) for r in requests] == [
        ("first", "Demo/Thing", {"Name": "a"}),
        ("second", "Tools/Widget", {}),
    ]


@pytest.mark.parametrize(
    "metadata",
    [
        {"Microsoft.DSC": {"context": "configuration-ish"}},
        {"Microsoft.DSC": "Configuration"},
        {"Other": {"context": "Configuration"}},
        None,
    ],
)
def test_configuration_mode_requires_exact_marker(metadata: object) -> None:
    payload = {"metadata": metadata, "adapted_dsc_type": "Demo/Thing"}

    assert is_configuration_document(payload) is False
    requests = parse_requests(json.dumps(payload), adapter_name=ADAPTER)
    assert requests[0].type == "Demo/Thing"
    assert requests[0].properties == {"metadata": metadata}


@pytest.mark.parametrize(
    ("raw", "match"),
    [
        ("{nope", "input JSON"),
        ("[1, 2]", "object"),
        ('{"Name": "x"}', "adapted_dsc_type"),
        ("", "adapted_dsc_type"),
        (_configuration({"name": "n"}), "type"),
        (_configuration({"type": "A/B", "properties": [1]}), "properties"),
        (_configuration(), "resource types"),
    ],
    ids=["malformed", "array", "missing-type", "empty", "config-missing-type", "bad-properties", "no-resources"],
)
def test_invalid_input_raises_request_error(raw: str, match: str) -> None:
    with pytest.raises(RequestError, match=match):
        parse_requests(raw, adapter_name=ADAPTER)


def test_requested_modules_are_type_prefixes() -> None:
    requests = parse_requests(
        _configuration({"type": "Demo/Thing"}, {"type": "Demo/Other"}, {"type": "Tools/Widget"}),
        adapter_name=ADAPTER,
    )

    assert requested_modules(requests) == frozenset({"Demo", "Tools"})
