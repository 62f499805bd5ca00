# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""JSON rendering of analysis results for machine consumers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ..analysis.results import AnalysisResult
from .formatter import relativize


class FindingPayload(BaseModel):
    """Serialised finding with its project-relative path."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int
    column: int
    code: str
    message: str


class ProjectPayload(BaseModel):
    """Serialised project block."""

    model_config = ConfigDict(frozen=True)

    project: str
    findings: list[FindingPayload]


class ReportPayload(BaseModel):
    """Top-level JSON document."""

    model_config = ConfigDict(frozen=True)

    workspace: str
    projects: list[ProjectPayload]


def build_payload(result: AnalysisResult) -> ReportPayload:
    """Return the serialisable payload for ``result``.

    Projects without findings are omitted, mirroring the text report.
    """

    root = result.workspace.root
    projects = [
        ProjectPayload(
            project=relativize(project_result.project.path, root),
            findings=[
                FindingPayload(
                    path=relativize(finding.path, project_result.project.root),
                    line=finding.line,
                    column=finding.column,
                    code=finding.code,
                    message=finding.message,
                )
                for finding in project_result.findings
            ],
        )
        for project_result in result.projects
        if project_result.findings
    ]
    return ReportPayload(workspace=result.workspace.path, projects=projects)


def format_json(result: AnalysisResult, *, indent: int | None = 2) -> str:
    """Return ``result`` serialised as a JSON document."""

    return build_payload(result).model_dump_json(indent=indent)


__all__ = ["FindingPayload", "ProjectPayload", "ReportPayload", "build_payload", "format_json"]
