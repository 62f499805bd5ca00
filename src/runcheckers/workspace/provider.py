# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compilation graph provider backed by ``pyproject.toml`` workspaces.

A workspace descriptor is a TOML file. Its members are taken from
``[tool.runcheckers] projects`` when configured, otherwise from the uv-style
``[tool.uv.workspace] members``/``exclude`` declaration, where a root
``pyproject.toml`` with its own ``[project]`` table is the first member. A
descriptor that is itself a ``pyproject.toml`` without either declaration is a
single-project workspace.
"""

from __future__ import annotations

import ast
import tokenize
import tomllib
from collections.abc import Callable, Iterable, Mapping, Sequence
from fnmatch import fnmatch
from functools import partial
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from ..config import RunConfig, WorkspaceDiagnosticPolicy
from ..errors import WorkspaceLoadError
from ..logging import warn as log_warn
from .discovery import iter_source_files
from .models import (
    IdentityPositionMapper,
    PositionMapper,
    Project,
    SourceUnit,
    Workspace,
    WorkspaceDiagnostic,
    WorkspaceDiagnosticKind,
)

PROJECT_FILE: Final[str] = "pyproject.toml"
_GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")

WarnCallback = Callable[[str], None]


@runtime_checkable
class CompilationGraphProvider(Protocol):
    """Open a workspace descriptor and expose its projects and units."""

    def open(self, descriptor: Path) -> Workspace:
        """Return the workspace described by ``descriptor``."""

        raise NotImplementedError


class WorkspaceDiagnosticHandler:
    """Apply a :class:`WorkspaceDiagnosticPolicy` to load diagnostics."""

    def __init__(self, policy: WorkspaceDiagnosticPolicy, *, warn: WarnCallback | None = None) -> None:
        """Bind ``policy`` to the callback used when diagnostics are surfaced.

        Args:
            policy: Whether diagnostics are dropped or surfaced as warnings.
            warn: Callback receiving rendered diagnostics under the ``warn``
                policy. Defaults to the stderr logging helper.
        """

        self.policy = policy
        self._warn = warn or partial(log_warn, use_emoji=False)

    def __call__(self, diagnostic: WorkspaceDiagnostic) -> None:
        if self.policy is WorkspaceDiagnosticPolicy.WARN:
            self._warn(f"Workspace: {diagnostic.render()}")


def read_descriptor(path: Path) -> dict[str, Any]:
    """Parse the TOML document at ``path``.

    Args:
        path: Workspace descriptor path.

    Returns:
        dict[str, Any]: Parsed document.

    Raises:
        WorkspaceLoadError: If the file is missing, unreadable or invalid TOML.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except FileNotFoundError as exc:
        raise WorkspaceLoadError(str(path), "descriptor not found") from exc
    except OSError as exc:
        raise WorkspaceLoadError(str(path), exc.strerror or str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise WorkspaceLoadError(str(path), f"invalid TOML: {exc}") from exc


class PyProjectWorkspaceProvider(CompilationGraphProvider):
    """Load a multi-project Python workspace from a TOML descriptor."""

    def __init__(
        self,
        config: RunConfig | None = None,
        *,
        warn: WarnCallback | None = None,
        mapper: PositionMapper | None = None,
    ) -> None:
        """Create a provider.

        Args:
            config: Run configuration supplying project declarations,
                exclusions and the workspace diagnostic policy.
            warn: Callback used when the policy surfaces diagnostics.
            mapper: Position mapper attached to every loaded unit.
        """

        self._config = config or RunConfig()
        self._handle = WorkspaceDiagnosticHandler(self._config.workspace_diagnostics, warn=warn)
        self._mapper = mapper or IdentityPositionMapper()

    def open(self, descriptor: Path) -> Workspace:
        """Load the workspace described by ``descriptor``.

        Args:
            descriptor: Path to the workspace TOML file.

        Returns:
            Workspace: Projects in declaration order with their units.

        Raises:
            WorkspaceLoadError: If the descriptor or its member declaration is invalid.
        """

        descriptor_path = Path(descriptor).expanduser().resolve()
        document = read_descriptor(descriptor_path)
        root = descriptor_path.parent
        project_files = self._project_files(document, descriptor_path)
        member_roots = frozenset(path.parent for path in project_files)
        projects = tuple(
            project
            for project in (self._load_project(path, root, member_roots) for path in project_files)
            if project is not None
        )
        return Workspace(path=str(descriptor_path), root=str(root), projects=projects)

    def _project_files(self, document: Mapping[str, Any], descriptor: Path) -> list[Path]:
        root = descriptor.parent
        if self._config.projects is not None:
            return self._expand(self._config.projects, (), root)
        uv_workspace = _uv_workspace(document)
        if uv_workspace is not None:
            members = _string_list(uv_workspace.get("members", []), "tool.uv.workspace.members", descriptor)
            excludes = _string_list(uv_workspace.get("exclude", []), "tool.uv.workspace.exclude", descriptor)
            expanded = self._expand(members, excludes, root)
            if descriptor.name == PROJECT_FILE and isinstance(document.get("project"), Mapping):
                return [descriptor, *(path for path in expanded if path != descriptor)]
            return expanded
        if descriptor.name == PROJECT_FILE:
            return [descriptor]
        raise WorkspaceLoadError(str(descriptor), "no projects declared")

    def _expand(self, patterns: Sequence[str], excludes: Sequence[str], root: Path) -> list[Path]:
        ordered: dict[Path, None] = {}
        for pattern in patterns:
            candidates = _match(pattern, root)
            if not candidates:
                self._handle(
                    WorkspaceDiagnostic(
                        WorkspaceDiagnosticKind.EMPTY_PATTERN,
                        str(root / pattern),
                        "pattern matched no projects",
                    ),
                )
            for candidate in candidates:
                if _is_excluded(candidate, excludes, root):
                    continue
                project_file = candidate if candidate.suffix == ".toml" else candidate / PROJECT_FILE
                ordered.setdefault(project_file.resolve(), None)
        return list(ordered)

    def _load_project(self, project_file: Path, workspace_root: Path, member_roots: frozenset[Path]) -> Project | None:
        if not project_file.is_file():
            self._handle(
                WorkspaceDiagnostic(WorkspaceDiagnosticKind.MISSING_PROJECT, str(project_file), "project file not found"),
            )
            return None
        try:
            with project_file.open("rb") as handle:
                tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            self._handle(WorkspaceDiagnostic(WorkspaceDiagnosticKind.INVALID_PROJECT, str(project_file), str(exc)))
            return None

        project_root = project_file.parent
        sources = iter_source_files(
            project_root,
            base=workspace_root,
            excludes=self._config.exclude,
            foreign_roots=member_roots,
        )
        units = tuple(unit for unit in (self._load_unit(path) for path in sources) if unit is not None)
        return Project(path=str(project_file), root=str(project_root), units=units)

    def _load_unit(self, path: Path) -> SourceUnit | None:
        try:
            with tokenize.open(path) as handle:
                source = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            self._handle(WorkspaceDiagnostic(WorkspaceDiagnosticKind.UNREADABLE_SOURCE, str(path), str(exc)))
            return None
        except SyntaxError as exc:
            self._handle(WorkspaceDiagnostic(WorkspaceDiagnosticKind.UNREADABLE_SOURCE, str(path), exc.msg))
            return None
        try:
            tree = ast.parse(source, filename=str(path))
        except (SyntaxError, ValueError, RecursionError, MemoryError) as exc:
            if isinstance(exc, SyntaxError):
                detail = f"line {exc.lineno}: {exc.msg}"
            else:
                detail = f"{type(exc).__name__}: {exc}"
            self._handle(WorkspaceDiagnostic(WorkspaceDiagnosticKind.SYNTAX_ERROR, str(path), detail))
            return None
        return SourceUnit(path=str(path), source=source, tree=tree, mapper=self._mapper)


def _uv_workspace(document: Mapping[str, Any]) -> Mapping[str, Any] | None:
    tool = document.get("tool")
    if not isinstance(tool, Mapping):
        return None
    uv = tool.get("uv")
    if not isinstance(uv, Mapping):
        return None
    workspace = uv.get("workspace")
    return workspace if isinstance(workspace, Mapping) else None


def _string_list(value: object, key: str, descriptor: Path) -> list[str]:
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise WorkspaceLoadError(str(descriptor), f"{key} must be a list of strings")


def _match(pattern: str, root: Path) -> list[Path]:
    if _GLOB_CHARS.intersection(pattern):
        return sorted(path for path in root.glob(pattern) if path.is_dir() or path.suffix == ".toml")
    return [root / pattern]


def _is_excluded(candidate: Path, excludes: Iterable[str], root: Path) -> bool:
    try:
        relative = candidate.relative_to(root).as_posix()
    except ValueError:
        relative = candidate.as_posix()
    return any(fnmatch(relative, pattern) for pattern in excludes)


__all__ = [
    "CompilationGraphProvider",
    "PROJECT_FILE",
    "PyProjectWorkspaceProvider",
    "WorkspaceDiagnosticHandler",
    "read_descriptor",
]
