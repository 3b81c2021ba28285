"""Constants for module enumeration and resource discovery."""

from __future__ import annotations

MODULE_MANIFEST_SUFFIX: str = ".module.yaml"
RESOURCE_MANIFEST_SUFFIX: str = ".resource.yaml"
RESOURCES_DIRNAME: str = "DSCResources"

# Script, manifest, module and compiled-schema files that witness cache freshness.
TRACKED_FILE_SUFFIXES: frozenset[str] = frozenset(
    {".py", ".yaml", ".yml", ".json", ".ps1", ".psd1", ".psm1", ".mof"}
)

DEFAULT_CAPABILITIES: tuple[str, ...] = ("get", "set", "test")

BUILTIN_MODULE_NAME: str = "PSDesiredStateConfiguration"
BUILTIN_COMPANY_NAME: str = "Microsoft Corporation"
BUILTIN_MODULE_VERSION: str = "1.0.0"

# Relative to the platform system root.
BUILTIN_MODULE_SUBPATHS: tuple[tuple[str, ...], ...] = (
    ("system32", "WindowsPowershell", "v1.0", "Modules", "PSDesiredStateConfiguration"),
    ("system32", "WindowsPowershell", "v1.0", "Modules", "Microsoft.Windows.DSC.CoreConfProviders"),
)
BUILTIN_CONFIGURATION_SUBPATH: tuple[str, ...] = ("System32", "Configuration")
LEGACY_RUNTIME_SUBPATH: tuple[str, ...] = ("System32", "WindowsPowerShell")

KIND_SCRIPT: str = "ScriptBased"
KIND_CLASS: str = "ClassBased"
KIND_BINARY: str = "Binary"
KIND_COMPOSITE: str = "Composite"
VALID_KINDS: frozenset[str] = frozenset({KIND_SCRIPT, KIND_CLASS, KIND_BINARY, KIND_COMPOSITE})
