"""YAML manifest readers for modules and resource descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from dsc_adapter.constants.discovery import MODULE_MANIFEST_SUFFIX, RESOURCE_MANIFEST_SUFFIX
from dsc_adapter.exceptions import ManifestError


@dataclass(frozen=True)
class ModuleRecord:
    """An installed module version as declared by its manifest."""

    name: str
    version: str
    base_path: Path
    author: str = ""
    company_name: str = ""
    description: str = ""
    capabilities: tuple[str, ...] = ()


def module_manifest_path(directory: Path, module_name: str) -> Path:
    return directory / f"{module_name}{MODULE_MANIFEST_SUFFIX}"


def is_resource_manifest(path: Path) -> bool:
    return path.is_file() and path.name.endswith(RESOURCE_MANIFEST_SUFFIX)


def read_module_manifest(path: Path) -> ModuleRecord:
    """Parse ``<Module>.module.yaml`` into a ``ModuleRecord``."""
    raw = _load_mapping(path)
    default_name = path.name.removesuffix(MODULE_MANIFEST_SUFFIX)
    name = _optional_text(raw, "name", path) or default_name
    version = _optional_text(raw, "version", path)
    if not version:
        raise ManifestError(f"Module manifest {path} does not declare a version")

    return ModuleRecord(
        name=name,
        version=version,
        base_path=path.parent,
        author=_optional_text(raw, "author", path),
        company_name=_optional_text(raw, "company_name", path),
        description=_optional_text(raw, "description", path),
        capabilities=tuple(_string_list(raw.get("capabilities"), "capabilities", path)),
    )


def read_resource_manifest(path: Path) -> dict[str, Any]:
    """Parse a ``<Resource>.resource.yaml`` descriptor into a raw resource record.

    The record keeps whatever metadata the descriptor declares; ``parent_path``
    and ``path`` are filled in from the descriptor location when absent.
    """
    raw = _load_mapping(path)
    name = raw.get("name") or path.name.removesuffix(RESOURCE_MANIFEST_SUFFIX)
    if not isinstance(name, str):
        raise ManifestError(f"Resource manifest {path} has a non-string name")

    record: dict[str, Any] = dict(raw)
    record["name"] = name
    record["parent_path"] = str(path.parent)
    record["properties"] = _string_list(raw.get("properties"), "properties", path)

    declared_path = raw.get("path")
    if isinstance(declared_path, str) and declared_path:
        record["path"] = str((path.parent / declared_path).resolve())
    else:
        script = path.parent / f"{name}.py"
        record["path"] = str(script if script.is_file() else path)
    return record


def _load_mapping(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8").lstrip("\ufeff")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in manifest {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ManifestError(f"Manifest {path} must be a YAML mapping")
    return raw


def _optional_text(raw: dict[str, Any], key: str, path: Path) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Unquoted versions such as ``1.2`` load as floats.
        return str(value)
    if not isinstance(value, str):
        raise ManifestError(f"Field {key!r} in {path} must be a string")
    return value.strip()


def _string_list(value: Any, key: str, path: Path) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ManifestError(f"Field {key!r} in {path} must be a list of strings")
    return list(value)
