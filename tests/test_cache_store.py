"""Tests for discovery cache persistence."""

from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from dsc_adapter.cache import CacheStore, default_cache_path
from dsc_adapter.constants.cache import CACHE_SCHEMA_VERSION
from dsc_adapter.model import CacheDocument, CacheEntry, ResourceInfo
from dsc_adapter.runtime import RuntimeInfo

SCHEMAS_DIR: Path = Path(__file__).resolve().parents[1] / "schemas"


def _entry(module: str = "Demo", name: str = "Thing", version: str = "1.0.0") -> CacheEntry:
    info = ResourceInfo(
        kind="ClassBased",
        name=name,
        module_name=module,
        version=version,
        path=f"/modules/{module}/DSCResources/{name}/{name}.py",
        parent_path=f"/modules/{module}/DSCResources/{name}",
        properties=("Name",),
        capabilities=("get", "set", "test"),
    )
    return CacheEntry(
        type_key=f"{module}/{name}",
        info=info,
        tracked_files={f"/modules/{module}/DSCResources/{name}/{name}.py": 1_700_000_000_123_456_789},
    )


def _document(*entries: CacheEntry) -> CacheDocument:
    return CacheDocument(
        schema_version=CACHE_SCHEMA_VERSION,
        search_paths=frozenset({"/modules/Demo", "/modules/Tools"}),
        entries=entries,
    )


def test_cache_roundtrip(tmp_path: Path) -> None:
    store = CacheStore(tmp_path / "cache.json", schema_version=CACHE_SCHEMA_VERSION)
    document = _document(_entry(), _entry("Tools", "Widget", "2.1.0"))

    store.save(document)
    loaded = store.load()

    assert loaded == document


def test_cache_save_creates_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "cache.json"
    store = CacheStore(path, schema_version=CACHE_SCHEMA_VERSION)

    store.save(_document(_entry()))

    assert path.is_file()
    assert not list(path.parent.glob("*.tmp"))


def test_cache_file_matches_schema(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    CacheStore(path, schema_version=CACHE_SCHEMA_VERSION).save(_document(_entry()))

    schema = json.loads((SCHEMAS_DIR / "cache.schema.json").read_text(encoding="utf-8"))
    jsonschema.Draft202012Validator.check_schema(schema)
    jsonschema.validate(instance=json.loads(path.read_text(encoding="utf-8")), schema=schema)


def test_load_missing_file_returns_none(tmp_path: Path) -> None:
    store = CacheStore(tmp_path / "absent.json", schema_version=CACHE_SCHEMA_VERSION)

    assert store.load() is None


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"schema_version": 1, "search_paths": [], "entries": []}',
        '{"search_paths": [], "entries": []}',
    ],
    ids=["malformed", "not-an-object", "old-version", "missing-version"],
)
def test_load_unusable_file_returns_none(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")

    assert CacheStore(path, schema_version=CACHE_SCHEMA_VERSION).load() is None


def test_load_skips_malformed_entries(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    good = _entry().to_dict()
    payload = {
        "schema_version": CACHE_SCHEMA_VERSION,
        "search_paths": ["/modules/Demo", 3],
        "entries": [good, {"type": "no-slash", "info": {}}, "junk", {"type": "A/B", "info": {"name": "B"}}],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    loaded = CacheStore(path, schema_version=CACHE_SCHEMA_VERSION).load()

    assert loaded is not None
    assert [entry.type_key for entry in loaded.entries] == ["Demo/Thing"]
    assert loaded.search_paths == frozenset({"/modules/Demo"})


def test_load_accepts_utf8_bom(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    payload = _document(_entry()).to_dict()
    path.write_text("\ufeff" + json.dumps(payload), encoding="utf-8")

    loaded = CacheStore(path, schema_version=CACHE_SCHEMA_VERSION).load()

    assert loaded is not None
    assert loaded.entries[0].type_key == "Demo/Thing"


def test_clear_removes_file(tmp_path: Path) -> None:
    store = CacheStore(tmp_path / "cache.json", schema_version=CACHE_SCHEMA_VERSION)
    store.save(_document(_entry()))

    assert store.clear() is True
    assert not store.path.exists()
    assert store.clear() is False


def test_default_cache_path_windows_uses_local_app_data() -> None:
    runtime = RuntimeInfo(platform_family="windows", local_app_data="C:/Users/me/AppData/Local", home="C:/Users/me")

    assert default_cache_path(runtime) == Path("C:/Users/me/AppData/Local") / "dsc" / "PythonAdapterCache.json"


def test_default_cache_path_posix_uses_home() -> None:
    runtime = RuntimeInfo(platform_family="linux", home="/home/me")

    assert default_cache_path(runtime) == Path("/home/me") / ".dsc" / "PythonAdapterCache.json"
