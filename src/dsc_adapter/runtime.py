"""Explicit description of the host platform and runtime.

Discovery and dispatch receive a ``RuntimeInfo`` instead of inspecting the
process environment themselves, so platform-conditional behavior can be
exercised deterministically.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dsc_adapter.constants.runtime import (
    ADAPTER_TYPE,
    DEFAULT_RUNTIME_MAJOR,
    LEGACY_ADAPTER_TYPE,
    LEGACY_RUNTIME_MAX_MAJOR,
    PLATFORM_LINUX,
    PLATFORM_MACOS,
    PLATFORM_WINDOWS,
)
from dsc_adapter.types import PlatformFamily


@dataclass(frozen=True)
class RuntimeInfo:
    """Platform family, host runtime major version and well-known directories."""

    platform_family: PlatformFamily
    major_version: int = DEFAULT_RUNTIME_MAJOR
    windir: str = ""
    home: str = ""
    local_app_data: str = ""

    @property
    def is_windows(self) -> bool:
        return self.platform_family == PLATFORM_WINDOWS

    @property
    def is_legacy(self) -> bool:
        """Whether the host is the legacy runtime that alone can load native binary resources."""
        return self.major_version <= LEGACY_RUNTIME_MAX_MAJOR

    @property
    def adapter_type(self) -> str:
        return LEGACY_ADAPTER_TYPE if self.is_legacy else ADAPTER_TYPE


def platform_family_for(platform: str) -> PlatformFamily:
    """Map a ``sys.platform`` value onto a platform family."""
    if platform.startswith("win") or platform == "cygwin":
        return PLATFORM_WINDOWS
    if platform == "darwin":
        return PLATFORM_MACOS
    return PLATFORM_LINUX


def detect_runtime(
    env: Mapping[str, str] | None = None,
    *,
    major_version: int = DEFAULT_RUNTIME_MAJOR,
    platform: str | None = None,
) -> RuntimeInfo:
    """Build a ``RuntimeInfo`` from the process environment."""
    env = os.environ if env is None else env
    family = platform_family_for(platform or sys.platform)
    home = env.get("HOME") or env.get("USERPROFILE") or str(Path.home())
    return RuntimeInfo(
        platform_family=family,
        major_version=major_version,
        windir=env.get("WINDIR") or env.get("SystemRoot") or "",
        home=home,
        local_app_data=env.get("LOCALAPPDATA", ""),
    )
