"""Constants for request parsing, dispatch and result normalization."""

from __future__ import annotations

OPERATION_GET: str = "Get"
OPERATION_SET: str = "Set"
OPERATION_TEST: str = "Test"
OPERATION_EXPORT: str = "Export"
INVOKE_OPERATIONS: tuple[str, ...] = (OPERATION_GET, OPERATION_SET, OPERATION_TEST, OPERATION_EXPORT)

OPERATION_LIST: str = "List"
OPERATION_VALIDATE: str = "Validate"
OPERATION_CLEAR_CACHE: str = "ClearCache"
VALID_OPERATIONS: tuple[str, ...] = (
    OPERATION_LIST,
    *INVOKE_OPERATIONS,
    OPERATION_VALIDATE,
    OPERATION_CLEAR_CACHE,
)

ENGINE_METADATA_KEY: str = "Microsoft.DSC"
CONFIGURATION_CONTEXT: str = "Configuration"
ADAPTED_TYPE_FIELD: str = "adapted_dsc_type"

IN_DESIRED_STATE_FIELD: str = "InDesiredState"
TEST_SUMMARY_FIELD: str = "_inDesiredState"

# Only these native resources can be invoked through the binary path.
BINARY_RESOURCE_ALLOWLIST: frozenset[str] = frozenset({"File", "Log", "SignatureValidation"})

# Provider-internal fields stripped from instance-shaped results.
RESULT_METADATA_DENYLIST: frozenset[str] = frozenset(
    {
        "PSComputerName",
        "PSShowComputerName",
        "CimClass",
        "CimClassName",
        "CimInstanceProperties",
        "CimSystemProperties",
        "ResourceId",
        "ConfigurationName",
        "ModuleName",
        "ModuleVersion",
        "SourceInfo",
        "PsDscRunAsCredential",
        "DependsOn",
    }
)

# Method names looked up on file-backed script resources.
SCRIPT_METHOD_NAMES: dict[str, str] = {
    OPERATION_GET: "get_target_resource",
    OPERATION_SET: "set_target_resource",
    OPERATION_TEST: "test_target_resource",
    OPERATION_EXPORT: "export_target_resource",
}

PROVIDER_ENTRY_POINT_GROUP: str = "dsc_adapter.providers"
