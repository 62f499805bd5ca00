# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for project source discovery."""

from __future__ import annotations

from pathlib import Path

from runcheckers.workspace.discovery import iter_source_files


def _touch(root: Path, *names: str) -> None:
    for name in names:
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("pass\n", encoding="utf-8")


def _names(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_python_files_are_returned_sorted(tmp_path: Path) -> None:
    _touch(tmp_path, "b.py", "a.py", "pkg/z.py", "pkg/a.py", "README.md", "setup.cfg")

    found = iter_source_files(tmp_path)

    assert _names(found, tmp_path) == ["a.py", "b.py", "pkg/a.py", "pkg/z.py"]


def test_tool_directories_are_skipped(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "main.py",
        ".git/hooks/post.py",
        "build/lib/main.py",
        "demo.egg-info/meta.py",
        "node_modules/x/y.py",
    )

    assert _names(iter_source_files(tmp_path), tmp_path) == ["main.py"]


def test_foreign_roots_are_not_entered(tmp_path: Path) -> None:
    _touch(tmp_path, "outer.py", "inner/inner.py")

    found = iter_source_files(tmp_path, foreign_roots=frozenset({tmp_path / "inner", tmp_path}))

    assert _names(found, tmp_path) == ["outer.py"]


def test_excludes_match_relative_to_base(tmp_path: Path) -> None:
    project = tmp_path / "app"
    _touch(project, "keep.py", "gen/api.py", "tests/test_api.py")

    found = iter_source_files(project, base=tmp_path, excludes=("app/gen", "*/test_*.py"))

    assert _names(found, project) == ["keep.py"]
