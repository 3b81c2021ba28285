"""Tests for cache staleness detection."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from dsc_adapter.cache import StalenessDetector, truncate_to_seconds
from dsc_adapter.constants.cache import CACHE_SCHEMA_VERSION
from dsc_adapter.model import CacheDocument, CacheEntry, ResourceInfo

BASE_NS: int = 1_700_000_000 * 1_000_000_000 + 100_000_000


def _tracked_file(tmp_path: Path, name: str, mtime_ns: int = BASE_NS) -> Path:
    path = tmp_path / name
    path.write_text("# resource\n", encoding="utf-8")
    os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


def _entry(type_key: str, *files: Path) -> CacheEntry:
    module, name = type_key.split("/")
    return CacheEntry(
        type_key=type_key,
        info=ResourceInfo(kind="ScriptBased", name=name, module_name=module),
        tracked_files={str(path): BASE_NS for path in files},
    )


def _detector(search_paths: frozenset[str] = frozenset()) -> StalenessDetector:
    return StalenessDetector(schema_version=CACHE_SCHEMA_VERSION, search_path_lister=lambda: search_paths)


def _document(*entries: CacheEntry, search_paths: frozenset[str] = frozenset()) -> CacheDocument:
    return CacheDocument(schema_version=CACHE_SCHEMA_VERSION, search_paths=search_paths, entries=entries)


def test_truncate_to_seconds_drops_sub_second_part() -> None:
    assert truncate_to_seconds(BASE_NS) == 1_700_000_000 * 1_000_000_000


def test_fresh_cache_is_not_stale(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")

    assert _detector().is_stale(_document(_entry("Demo/Thing", script))) is False


def test_modified_file_marks_cache_stale(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("Demo/Thing", script))
    os.utime(script, ns=(BASE_NS + 1_000_000_000, BASE_NS + 1_000_000_000))

    assert _detector().is_stale(document) is True


def test_sub_second_change_is_ignored(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("Demo/Thing", script))
    os.utime(script, ns=(BASE_NS + 600_000_000, BASE_NS + 600_000_000))

    assert _detector().is_stale(document) is False


def test_deleted_file_marks_cache_stale(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("Demo/Thing", script))
    script.unlink()

    assert _detector().is_stale(document) is True


def test_schema_mismatch_is_stale(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = CacheDocument(schema_version=CACHE_SCHEMA_VERSION - 1, entries=(_entry("Demo/Thing", script),))

    assert _detector().is_stale(document) is True


def test_empty_cache_is_stale() -> None:
    assert _detector().is_stale(_document()) is True


def test_search_path_drift_is_stale(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("Demo/Thing", script), search_paths=frozenset({"/modules/Demo"}))

    assert _detector(frozenset({"/modules/Demo"})).is_stale(document) is False
    assert _detector(frozenset({"/modules/Demo", "/modules/New"})).is_stale(document) is True
    assert _detector(frozenset()).is_stale(document) is True


def test_module_filter_ignores_other_modules(tmp_path: Path) -> None:
    fresh = _tracked_file(tmp_path, "Thing.py")
    gone = _tracked_file(tmp_path, "Widget.py")
    document = _document(_entry("Demo/Thing", fresh), _entry("Tools/Widget", gone))
    gone.unlink()

    assert _detector().is_stale(document, ["Demo"]) is False
    assert _detector().is_stale(document, ["Tools"]) is True


def test_module_filter_skips_search_path_check(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("Demo/Thing", script))

    assert _detector(frozenset({"/somewhere/else"})).is_stale(document, ["Demo"]) is False


def test_module_absent_from_cache_is_stale_without_file_checks(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    detector = _detector()
    checked: list[str] = []
    original = detector.is_file_stale

    def spy(path: str, cached_mtime_ns: int) -> bool:
        checked.append(path)
        return original(path, cached_mtime_ns)

    monkeypatch.setattr(detector, "is_file_stale", spy)

    assert detector.is_stale(_document(_entry("Demo/Thing", script)), ["Missing"]) is True
    assert checked == []


def test_module_prefix_does_not_match_longer_module_names(tmp_path: Path) -> None:
    script = _tracked_file(tmp_path, "Thing.py")
    document = _document(_entry("DemoExtra/Thing", script))

    assert _detector().is_stale(document, ["Demo"]) is True
