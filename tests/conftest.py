"""Shared pytest fixtures that build module trees on disk."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeAlias

import pytest
import yaml

from dsc_adapter.config import AdapterConfig
from dsc_adapter.runtime import RuntimeInfo

ModuleFactory: TypeAlias = Callable[..., Path]


@pytest.fixture()
def modules_root(tmp_path: Path) -> Path:
    """Return an empty module search path."""
    root = tmp_path / "modules"
    root.mkdir()
    return root


@pytest.fixture()
def make_module(modules_root: Path) -> ModuleFactory:
    """Return a factory that writes ``<Module>[/<version>]`` with a manifest and resources.

    Each ``resources`` value is the descriptor mapping; an optional ``source``
    key is written as ``<Resource>.py`` next to the descriptor.
    """

    def factory(
        name: str,
        version: str = "1.0.0",
        *,
        resources: dict[str, dict[str, Any]] | None = None,
        versioned: bool = False,
        description: str = "",
        capabilities: list[str] | None = None,
        root: Path | None = None,
    ) -> Path:
        base = (root or modules_root) / name
        if versioned:
            base = base / version
        base.mkdir(parents=True, exist_ok=True)

        manifest: dict[str, Any] = {
            "version": version,
            "author": "Test Author",
            "company_name": "Contoso",
            "description": description,
        }
        if capabilities is not None:
            manifest["capabilities"] = capabilities
        (base / f"{name}.module.yaml").write_text(yaml.safe_dump(manifest), encoding="utf-8")

        for resource_name, descriptor in (resources or {}).items():
            resource_dir = base / "DSCResources" / resource_name
            resource_dir.mkdir(parents=True, exist_ok=True)
            fields = dict(descriptor)
            source = fields.pop("source", None)
            (resource_dir / f"{resource_name}.resource.yaml").write_text(yaml.safe_dump(fields), encoding="utf-8")
            if source is not None:
                (resource_dir / f"{resource_name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        return base

    return factory


@pytest.fixture()
def linux_runtime(tmp_path: Path) -> RuntimeInfo:
    return RuntimeInfo(platform_family="linux", major_version=7, home=str(tmp_path / "home"))


@pytest.fixture()
def windows_runtime(tmp_path: Path) -> RuntimeInfo:
    return RuntimeInfo(
        platform_family="windows",
        major_version=7,
        home=str(tmp_path / "home"),
        local_app_data=str(tmp_path / "appdata"),
    )


@pytest.fixture()
def make_config(tmp_path: Path, modules_root: Path, linux_runtime: RuntimeInfo) -> Callable[..., AdapterConfig]:
    """Return a factory for configs rooted in the test's temporary directory."""

    def factory(runtime: RuntimeInfo | None = None, **overrides: Any) -> AdapterConfig:
        values: dict[str, Any] = {
            "cache_path": tmp_path / "cache" / "PythonAdapterCache.json",
            "runtime": runtime or linux_runtime,
            "module_paths": (modules_root,),
        }
        values.update(overrides)
        return AdapterConfig(**values)

    return factory


CLASS_THING_SOURCE = """
    class Thing:
        def __init__(self):
            self.Name = ""
            self.Ensure = "Present"
            self.ModuleName = "Demo"
            self._calls = 0

        def get(self):
            self._calls += 1
            return self

        def set(self):
            self.Ensure = "Present"

        def test(self):
            return self.Name == "x"

        def export(self):
            return [{"Name": "first"}, {"Name": "second"}]
"""

SCRIPT_WIDGET_SOURCE = """
    def get_target_resource(Name):
        return {"Name": Name, "Status": "ok"}

    def set_target_resource(Name, Status="ok"):
        return None

    def test_target_resource(Name, Status="ok"):
        return Status == "ok"
"""


@pytest.fixture()
def demo_module(make_module: ModuleFactory) -> Path:
    """Module ``Demo`` with one class-style resource ``Thing``."""
    return make_module(
        "Demo",
        "1.0.0",
        resources={"Thing": {"kind": "ClassBased", "properties": ["Name", "Ensure"], "source": CLASS_THING_SOURCE}},
        description="Demo module\nSecond line",
    )


@pytest.fixture()
def widget_module(make_module: ModuleFactory) -> Path:
    """Module ``Tools`` with one script resource ``Widget``."""
    return make_module(
        "Tools",
        "2.1.0",
        resources={"Widget": {"kind": "ScriptBased", "properties": ["Name", "Status"], "source": SCRIPT_WIDGET_SOURCE}},
    )


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo tracing configuration made by CLI runs so caplog keeps seeing records."""
    yield
    package_logger = logging.getLogger("dsc_adapter")
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
