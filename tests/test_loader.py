# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for analyzer module loading."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from runcheckers.errors import PluginLoadError
from runcheckers.plugins import load_checkers
from runcheckers.plugins.failures import LoadFailureKind
from runcheckers.plugins.loader import (
    CHECKERS_PLUGIN_GROUP,
    FileModuleLoader,
    ImportModuleLoader,
    load_analyzer_module,
    load_entry_point_plugins,
    looks_like_path,
    resolve_loader,
)
from tests.helpers.plugins import RULE_PLUGIN, write_plugin


class _FakeEntryPoint:
    def __init__(self, value: Any, *, name: str = "fake", target: str = "fake.module") -> None:
        self._value = value
        self.name = name
        self.value = target

    def load(self) -> Any:
        if isinstance(self._value, BaseException):
            raise self._value
        return self._value


def test_load_file_module(rule_plugin: Path) -> None:
    module = load_analyzer_module(str(rule_plugin))

    assert hasattr(module, "BadThingChecker")
    assert module.__name__.startswith("_runcheckers_plugin_")


def test_load_package_directory(tmp_path: Path) -> None:
    package = tmp_path / "acme_rules"
    write_plugin(package, "from .rules import VALUE\n", name="__init__.py")
    write_plugin(package, "VALUE = 42\n", name="rules.py")

    module = load_analyzer_module(str(package))

    assert module.VALUE == 42


def test_missing_path_is_classified(tmp_path: Path) -> None:
    missing = tmp_path / "nowhere" / "analyzer.py"

    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module(str(missing))

    assert excinfo.value.failure.kind is LoadFailureKind.MISSING
    assert str(excinfo.value) == f"No analyzer module found at {missing}"


def test_directory_without_package_is_missing(tmp_path: Path) -> None:
    directory = tmp_path / "bin"
    directory.mkdir()
    (directory / "readme.txt").write_text("not a module", encoding="utf-8")

    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module(str(directory))

    assert str(excinfo.value) == f"No analyzer module found at {directory}"


def test_syntax_error_is_malformed(tmp_path: Path) -> None:
    plugin = write_plugin(tmp_path, "class Broken(:\n")

    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module(str(plugin))

    assert excinfo.value.failure.kind is LoadFailureKind.MALFORMED


def test_missing_dependency_is_incompatible(tmp_path: Path) -> None:
    plugin = write_plugin(tmp_path, "import runcheckers_dependency_that_does_not_exist\n")

    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module(str(plugin))

    assert excinfo.value.failure.kind is LoadFailureKind.INCOMPATIBLE


def test_failed_module_is_not_left_registered(tmp_path: Path) -> None:
    import sys

    plugin = write_plugin(tmp_path, "import runcheckers_dependency_that_does_not_exist\n")

    with pytest.raises(PluginLoadError):
        load_analyzer_module(str(plugin))

    assert not [name for name in sys.modules if name.startswith("_runcheckers_plugin")]


def test_unclassified_errors_propagate(tmp_path: Path) -> None:
    plugin = write_plugin(tmp_path, "raise RuntimeError('plugin refused to load')\n")

    with pytest.raises(RuntimeError, match="plugin refused to load"):
        load_analyzer_module(str(plugin))


def test_access_denied_through_custom_loader() -> None:
    class _DeniedLoader:
        def load(self, reference: str) -> ModuleType:
            raise PermissionError(13, "Permission denied", reference)

    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module("/secure/analyzer.py", loader=_DeniedLoader())

    assert excinfo.value.failure.kind is LoadFailureKind.ACCESS_DENIED
    assert "/secure/analyzer.py" in str(excinfo.value)


def test_dotted_module_names_use_import_loader() -> None:
    module = load_analyzer_module("runcheckers.checkers")

    assert module.__name__ == "runcheckers.checkers"
    assert isinstance(resolve_loader("runcheckers.checkers"), ImportModuleLoader)


def test_missing_dotted_module_is_missing() -> None:
    with pytest.raises(PluginLoadError) as excinfo:
        load_analyzer_module("runcheckers_missing_rules")

    assert str(excinfo.value) == "No analyzer module found at runcheckers_missing_rules"


def test_path_detection(tmp_path: Path) -> None:
    assert looks_like_path("rules.py")
    assert looks_like_path("plugins/rules")
    assert looks_like_path(str(tmp_path))
    assert not looks_like_path("acme.rules")
    assert isinstance(resolve_loader("rules.py"), FileModuleLoader)


def test_entry_point_plugins_are_loaded(monkeypatch: pytest.MonkeyPatch) -> None:
    entries = {CHECKERS_PLUGIN_GROUP: (_FakeEntryPoint("first"), _FakeEntryPoint("second"))}
    monkeypatch.setattr(metadata, "entry_points", lambda: entries)

    assert load_entry_point_plugins() == ("first", "second")


def test_entry_point_select_api(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Container:
        def select(self, *, group: str) -> tuple[_FakeEntryPoint, ...]:
            if group == CHECKERS_PLUGIN_GROUP:
                return (_FakeEntryPoint("selected"),)
            return ()

    monkeypatch.setattr(metadata, "entry_points", lambda: _Container())

    assert load_entry_point_plugins() == ("selected",)


def test_broken_entry_point_is_not_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    broken = _FakeEntryPoint(ImportError("incompatible"), target="acme.rules:Checker")
    monkeypatch.setattr(metadata, "entry_points", lambda: {CHECKERS_PLUGIN_GROUP: (broken,)})

    with pytest.raises(PluginLoadError) as excinfo:
        load_entry_point_plugins()

    assert excinfo.value.failure.artifact == "acme.rules:Checker"
    assert excinfo.value.failure.kind is LoadFailureKind.INCOMPATIBLE


def test_load_checkers_includes_installed(monkeypatch: pytest.MonkeyPatch, rule_plugin: Path, tmp_path: Path) -> None:
    extra = load_analyzer_module(str(write_plugin(tmp_path / "extra", RULE_PLUGIN.replace("BadThing", "Other"))))
    monkeypatch.setattr(metadata, "entry_points", lambda: {CHECKERS_PLUGIN_GROUP: (_FakeEntryPoint(extra.OtherChecker),)})

    names = [checker.name for checker in load_checkers(str(rule_plugin), include_installed=True)]

    assert names == ["BadThingChecker", "PrintChecker", "OtherChecker"]
