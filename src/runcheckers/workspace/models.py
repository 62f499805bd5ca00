# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Workspace, project and source unit models handed to checkers."""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..models import Finding, Location


@runtime_checkable
class PositionMapper(Protocol):
    """Resolve a raw source position to the author-facing location."""

    def map(self, path: str, line: int, column: int) -> Location:
        """Return the mapped location for ``line``/``column`` in ``path``."""

        raise NotImplementedError


class IdentityPositionMapper(PositionMapper):
    """Report positions exactly where the parser found them."""

    def map(self, path: str, line: int, column: int) -> Location:
        return Location(path=path, line=line, column=column)


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One parsed Python source file.

    Attributes:
        path: Absolute path of the file, used as the unit's identity.
        source: Decoded file contents.
        tree: Module AST produced by :func:`ast.parse`.
        mapper: Resolver used to turn AST positions into finding locations.
    """

    path: str
    source: str
    tree: ast.Module
    mapper: PositionMapper = field(default_factory=IdentityPositionMapper, compare=False)

    def location(self, node: ast.AST | tuple[int, int]) -> Location:
        """Return the mapped, 1-indexed location of ``node``.

        Args:
            node: AST node carrying ``lineno``/``col_offset``, or a raw
                ``(line, column)`` pair that is already 1-indexed.

        Returns:
            Location: Location resolved through the unit's position mapper.
        """

        if isinstance(node, tuple):
            line, column = node
        else:
            line = getattr(node, "lineno", 1)
            column = getattr(node, "col_offset", 0) + 1
        return self.mapper.map(self.path, line, column)

    def finding(self, node: ast.AST | tuple[int, int], code: str, message: str) -> Finding:
        """Return a finding for ``node`` at its mapped location."""

        return Finding.at(self.location(node), code=code, message=message)

    @property
    def lines(self) -> list[str]:
        """Return the source split into lines without line terminators."""

        return self.source.splitlines()


@dataclass(frozen=True, slots=True)
class Project:
    """A workspace member: its descriptor path, root directory and units."""

    path: str
    root: str
    units: tuple[SourceUnit, ...] = ()

    @property
    def name(self) -> str:
        """Return the project directory name."""

        return Path(self.root).name

    def unit_paths(self) -> frozenset[str]:
        """Return the identities of all units owned by the project."""

        return frozenset(unit.path for unit in self.units)


@dataclass(frozen=True, slots=True)
class Workspace:
    """Scope of a single run: the descriptor and its ordered projects."""

    path: str
    root: str
    projects: tuple[Project, ...] = ()


class WorkspaceDiagnosticKind(str, Enum):
    """Enumerate non-fatal problems encountered while loading a workspace."""

    MISSING_PROJECT = "missing-project"
    INVALID_PROJECT = "invalid-project"
    EMPTY_PATTERN = "empty-pattern"
    UNREADABLE_SOURCE = "unreadable-source"
    SYNTAX_ERROR = "syntax-error"


@dataclass(frozen=True, slots=True)
class WorkspaceDiagnostic:
    """Non-fatal workspace load problem."""

    kind: WorkspaceDiagnosticKind
    path: str
    message: str

    def render(self) -> str:
        """Return a one-line description suitable for logging."""

        return f"{self.kind.value}: {self.path}: {self.message}"


__all__ = [
    "IdentityPositionMapper",
    "PositionMapper",
    "Project",
    "SourceUnit",
    "Workspace",
    "WorkspaceDiagnostic",
    "WorkspaceDiagnosticKind",
]
