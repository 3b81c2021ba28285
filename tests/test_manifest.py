"""Tests for YAML module manifests and resource descriptors."""

from __future__ import annotations

from pathlib import Path

import pytest

from dsc_adapter.discovery.manifest import read_module_manifest, read_resource_manifest
from dsc_adapter.exceptions import ManifestError


def test_read_module_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / "Demo.module.yaml"
    manifest.write_text(
        "version: 1.2\nauthor: Jane\ncompany_name: Contoso\ncapabilities: [get, test]\n",
        encoding="utf-8",
    )

    record = read_module_manifest(manifest)

    assert record.name == "Demo"
    assert record.version == "1.2"
    assert record.author == "Jane"
    assert record.base_path == tmp_path
    assert record.capabilities == ("get", "test")


def test_module_manifest_requires_version(tmp_path: Path) -> None:
    manifest = tmp_path / "Demo.module.yaml"
    manifest.write_text("author: Jane\n", encoding="utf-8")

    with pytest.raises(ManifestError, match="version"):
        read_module_manifest(manifest)


@pytest.mark.parametrize(
    "content",
    ["- a\n- b\n", "version: [1\n", "version: 1.0\ncapabilities: get\n"],
    ids=["not-a-mapping", "invalid-yaml", "capabilities-not-a-list"],
)
def test_module_manifest_rejects_bad_content(tmp_path: Path, content: str) -> None:
    manifest = tmp_path / "Demo.module.yaml"
    manifest.write_text(content, encoding="utf-8")

    with pytest.raises(ManifestError):
        read_module_manifest(manifest)


def test_resource_descriptor_defaults(tmp_path: Path) -> None:
    descriptor = tmp_path / "Thing.resource.yaml"
    descriptor.write_text("\ufeffkind: ClassBased\nproperties: [Name]\n", encoding="utf-8")
    (tmp_path / "Thing.py").write_text("class Thing: ...\n", encoding="utf-8")

    record = read_resource_manifest(descriptor)

    assert record["name"] == "Thing"
    assert record["kind"] == "ClassBased"
    assert record["properties"] == ["Name"]
    assert record["parent_path"] == str(tmp_path)
    assert record["path"] == str(tmp_path / "Thing.py")


def test_resource_descriptor_declared_path_is_resolved(tmp_path: Path) -> None:
    descriptor = tmp_path / "Thing.resource.yaml"
    descriptor.write_text("name: Thing\nkind: ScriptBased\npath: impl/thing_impl.py\n", encoding="utf-8")

    record = read_resource_manifest(descriptor)

    assert record["path"] == str((tmp_path / "impl" / "thing_impl.py").resolve())


def test_resource_descriptor_without_script_points_at_itself(tmp_path: Path) -> None:
    descriptor = tmp_path / "Thing.resource.yaml"
    descriptor.write_text("kind: ScriptBased\n", encoding="utf-8")

    assert read_resource_manifest(descriptor)["path"] == str(descriptor)
