"""Config data model for the adapter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dsc_adapter.constants.tracing import DEFAULT_TRACE_LEVEL
from dsc_adapter.runtime import RuntimeInfo


@dataclass(frozen=True)
class AdapterConfig:
    """Resolved adapter config."""

    cache_path: Path
    runtime: RuntimeInfo
    module_paths: tuple[Path, ...] = ()
    trace_level: str = DEFAULT_TRACE_LEVEL
    use_cache: bool = True
