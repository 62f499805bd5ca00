# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render analysis results as grouped, path-relativised text."""

from __future__ import annotations

import os
from typing import Final

from ..analysis.results import AnalysisResult, ProjectResult
from ..models import Finding

PROJECT_HEADER_TEMPLATE: Final[str] = "In {path}:"
FINDING_TEMPLATE: Final[str] = "{path}, line {line} {code}: {message}"


def relativize(path: str, root: str) -> str:
    """Strip ``root`` and a separator from the front of ``path``.

    The comparison is a plain string prefix check, so a sibling directory that
    merely shares a name prefix (``/ws/app2`` against ``/ws/app``) is left
    untouched. The separator is always appended, so a root given with a
    trailing separator (including ``/``) leaves normalised paths unchanged.

    Args:
        path: Absolute path to display.
        root: Directory the path should be shown relative to.

    Returns:
        str: ``path`` without the ``root`` prefix, or ``path`` unchanged when
        it does not live under ``root``.
    """

    prefix = f"{root}{os.sep}"
    if root and path.startswith(prefix):
        return path[len(prefix) :]
    return path


def format_finding(finding: Finding, project_root: str) -> str:
    """Return the report line for ``finding``."""

    return FINDING_TEMPLATE.format(
        path=relativize(finding.path, project_root),
        line=finding.line,
        code=finding.code,
        message=finding.message,
    )


def format_project(result: ProjectResult, workspace_root: str) -> list[str]:
    """Return the report block for one project, or nothing when it has no findings.

    Args:
        result: Project result to render.
        workspace_root: Root used to relativise the project path.

    Returns:
        list[str]: Blank line, header, blank line and one line per finding.
    """

    if not result.findings:
        return []
    header = PROJECT_HEADER_TEMPLATE.format(path=relativize(result.project.path, workspace_root))
    lines = ["", header, ""]
    lines.extend(format_finding(finding, result.project.root) for finding in result.findings)
    return lines


def format_report(result: AnalysisResult) -> list[str]:
    """Render ``result`` as report lines, projects in result order.

    Args:
        result: Completed analysis result.

    Returns:
        list[str]: Lines without trailing newlines. Empty when nothing was found.
    """

    lines: list[str] = []
    for project_result in result.projects:
        lines.extend(format_project(project_result, result.workspace.root))
    return lines


__all__ = [
    "FINDING_TEMPLATE",
    "PROJECT_HEADER_TEMPLATE",
    "format_finding",
    "format_project",
    "format_report",
    "relativize",
]
