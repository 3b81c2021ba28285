"""Config loading and normalization for the adapter.

Precedence, lowest first: built-in defaults, the optional YAML config file,
then environment variables.
"""

from __future__ import annotations

import difflib
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from dsc_adapter.cache.store import default_cache_path
from dsc_adapter.config.model import AdapterConfig
from dsc_adapter.constants.config import (
    CONFIG_ALLOWED_KEYS,
    ENV_CACHE_PATH,
    ENV_CONFIG_PATH,
    ENV_MODULE_PATH,
    ENV_RUNTIME_MAJOR,
    ENV_TRACE_LEVEL,
)
from dsc_adapter.constants.runtime import DEFAULT_RUNTIME_MAJOR
from dsc_adapter.constants.tracing import DEFAULT_TRACE_LEVEL, TRACE_LEVELS
from dsc_adapter.exceptions import ConfigError
from dsc_adapter.runtime import detect_runtime


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AdapterConfig:
    """Resolve adapter config from an optional YAML file and the environment."""
    env = os.environ if env is None else env
    explicit = config_path is not None
    if config_path is None and env.get(ENV_CONFIG_PATH):
        config_path = Path(env[ENV_CONFIG_PATH])
        explicit = True

    raw = _read_config_file(config_path, explicit=explicit) if config_path is not None else {}

    major_version = _parse_major_version(
        raw.get("runtime_major_version", DEFAULT_RUNTIME_MAJOR),
        "runtime_major_version",
    )
    if env.get(ENV_RUNTIME_MAJOR):
        major_version = _parse_major_version(env[ENV_RUNTIME_MAJOR], ENV_RUNTIME_MAJOR)
    runtime = detect_runtime(env, major_version=major_version)

    module_paths = _merge_paths(
        _split_search_path(env.get(ENV_MODULE_PATH, "")),
        _ensure_string_list(raw.get("module_paths", []), "module_paths"),
    )

    cache_path_raw = env.get(ENV_CACHE_PATH) or raw.get("cache_path")
    if cache_path_raw is not None and not isinstance(cache_path_raw, str):
        raise ConfigError("cache_path must be a string")
    cache_path = Path(cache_path_raw).expanduser() if cache_path_raw else default_cache_path(runtime)

    trace_level = env.get(ENV_TRACE_LEVEL) or raw.get("trace_level", DEFAULT_TRACE_LEVEL)
    trace_level = validate_trace_level(trace_level)

    use_cache = raw.get("use_cache", True)
    if not isinstance(use_cache, bool):
        raise ConfigError("use_cache must be a boolean")

    return AdapterConfig(
        cache_path=cache_path,
        runtime=runtime,
        module_paths=module_paths,
        trace_level=trace_level,
        use_cache=use_cache,
    )


def with_trace_level(config: AdapterConfig, level: str) -> AdapterConfig:
    """Return *config* with a validated trace level override."""
    return replace(config, trace_level=validate_trace_level(level))


def validate_trace_level(level: object) -> str:
    """Normalize a trace level name, raising ``ConfigError`` for unknown values."""
    if not isinstance(level, str) or level.strip().lower() not in TRACE_LEVELS:
        raise ConfigError(f"trace_level must be one of {sorted(TRACE_LEVELS)}, got {level!r}")
    return level.strip().lower()


def _read_config_file(path: Path, *, explicit: bool) -> dict[str, Any]:
    path = path.expanduser()
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    for key in sorted(set(raw) - CONFIG_ALLOWED_KEYS):
        hint = _suggest_key(str(key), CONFIG_ALLOWED_KEYS)
        raise ConfigError(f"Unknown config key {key!r} in {path}" + (f" ({hint})" if hint else ""))
    return raw


def _parse_major_version(value: object, key_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a positive integer")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive integer")
    return value


def _split_search_path(value: str) -> list[str]:
    return [part for part in (item.strip() for item in value.split(os.pathsep)) if part]


def _merge_paths(*groups: list[str]) -> tuple[Path, ...]:
    """Merge path lists preserving first occurrence order."""
    seen: set[str] = set()
    merged: list[Path] = []
    for group in groups:
        for item in group:
            if item in seen:
                continue
            seen.add(item)
            merged.append(Path(item).expanduser())
    return tuple(merged)


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""
