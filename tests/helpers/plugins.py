# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer module sources written to disk by tests."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

RULE_PLUGIN = '''
import ast

from runcheckers import Checker


class BadThingChecker(Checker):
    codes = ("RULE1",)

    def check(self, unit):
        for index, line in enumerate(unit.lines, start=1):
            if "bad" in line:
                yield unit.finding((index, line.index("bad") + 1), "RULE1", "bad thing")


class PrintChecker(Checker):
    codes = ("RC001",)

    def check(self, unit):
        for node in ast.walk(unit.tree):
            if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id == "print":
                yield unit.finding(node, "RC001", "print() call")
'''

EXPLODING_PLUGIN = '''
from runcheckers import Checker


class ExplodingChecker(Checker):
    def check(self, unit):
        if unit.path.endswith("boom.py"):
            raise RuntimeError("checker exploded")
        yield unit.finding((1, 1), "OK1", "visited")
'''

NEEDS_ARGS_PLUGIN = '''
from runcheckers import Checker


class ConfiguredChecker(Checker):
    def __init__(self, threshold):
        self.threshold = threshold

    def check(self, unit):
        return ()
'''


def write_plugin(directory: Path, source: str, *, name: str = "analyzer.py") -> Path:
    """Write ``source`` as a plugin module inside ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(dedent(source), encoding="utf-8")
    return path
