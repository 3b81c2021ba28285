"""Runtime and platform constants."""

from __future__ import annotations

PLATFORM_WINDOWS: str = "windows"
PLATFORM_LINUX: str = "linux"
PLATFORM_MACOS: str = "macos"

# Host runtimes at or below this major version are the legacy runtime.
LEGACY_RUNTIME_MAX_MAJOR: int = 5
DEFAULT_RUNTIME_MAJOR: int = 7

ADAPTER_TYPE: str = "Microsoft.DSC/PowerShell"
LEGACY_ADAPTER_TYPE: str = "Microsoft.Windows/WindowsPowerShell"
