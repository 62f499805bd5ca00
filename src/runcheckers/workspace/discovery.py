# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem discovery of Python source files for a project."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Final

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        ".venv",
        "venv",
        "dist",
        "build",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        ".cache",
    },
)
SOURCE_SUFFIX: Final[str] = ".py"


@dataclass(frozen=True, slots=True)
class WalkContext:
    """Parameters required to walk one project directory."""

    root: Path
    base: Path
    excludes: tuple[str, ...]
    foreign_roots: frozenset[Path]


def iter_source_files(
    root: Path,
    *,
    base: Path | None = None,
    excludes: Sequence[str] = (),
    foreign_roots: frozenset[Path] = frozenset(),
) -> list[Path]:
    """Return the Python files owned by the project rooted at ``root``.

    Args:
        root: Project directory to walk.
        base: Directory exclusion globs are relative to; defaults to ``root``.
        excludes: ``fnmatch`` patterns matched against POSIX paths relative
            to ``base``.
        foreign_roots: Directories owned by other projects; never entered.

    Returns:
        list[Path]: Sorted absolute paths of ``.py`` files.
    """

    context = WalkContext(
        root=root,
        base=base or root,
        excludes=tuple(excludes),
        foreign_roots=frozenset(path for path in foreign_roots if path != root),
    )
    return sorted(_walk(context))


def _walk(context: WalkContext) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(context.root, followlinks=False):
        current = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if not _should_skip_directory(current / name, context))
        for filename in sorted(filenames):
            if not filename.endswith(SOURCE_SUFFIX):
                continue
            candidate = current / filename
            if _is_excluded(candidate, context):
                continue
            yield candidate


def _should_skip_directory(path: Path, context: WalkContext) -> bool:
    if path.name in ALWAYS_EXCLUDE_DIRS or path.name.endswith(".egg-info"):
        return True
    if path in context.foreign_roots:
        return True
    return _is_excluded(path, context)


def _is_excluded(path: Path, context: WalkContext) -> bool:
    if not context.excludes:
        return False
    try:
        relative = path.relative_to(context.base).as_posix()
    except ValueError:
        relative = path.as_posix()
    return any(fnmatch(relative, pattern) for pattern in context.excludes)


__all__ = ["ALWAYS_EXCLUDE_DIRS", "SOURCE_SUFFIX", "iter_source_files"]
