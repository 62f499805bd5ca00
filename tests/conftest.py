# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from tests.helpers.plugins import RULE_PLUGIN, write_plugin


@pytest.fixture(autouse=True)
def _forget_plugin_modules() -> Iterator[None]:
    """Drop synthetic plugin modules registered by a test."""
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        if name.startswith("_runcheckers_plugin"):
            sys.modules.pop(name, None)


@pytest.fixture
def rule_plugin(tmp_path: Path) -> Path:
    """Return the path of an analyzer exporting ``BadThingChecker`` and ``PrintChecker``."""
    return write_plugin(tmp_path / "plugins", RULE_PLUGIN)
