"""Configuration defaults, file names and environment variables."""

from __future__ import annotations

ENV_CONFIG_PATH: str = "DSC_ADAPTER_CONFIG"
ENV_MODULE_PATH: str = "DSC_ADAPTER_MODULE_PATH"
ENV_CACHE_PATH: str = "DSC_ADAPTER_CACHE_PATH"
ENV_RUNTIME_MAJOR: str = "DSC_ADAPTER_RUNTIME_MAJOR"
ENV_TRACE_LEVEL: str = "DSC_TRACE_LEVEL"

CONFIG_ALLOWED_KEYS: frozenset[str] = frozenset(
    {"cache_path", "module_paths", "runtime_major_version", "trace_level", "use_cache"}
)
