# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result containers produced by the analysis runner."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import Finding
from ..workspace.models import Project, Workspace


@dataclass(frozen=True, slots=True)
class AnalysisFailure:
    """A checker raised while analysing one unit."""

    checker: str
    path: str
    error: Exception

    def render(self) -> str:
        """Return a one-line description suitable for logging."""

        return f"Checker {self.checker} failed on {self.path}: {type(self.error).__name__}: {self.error}"


@dataclass(frozen=True, slots=True)
class RejectedFinding:
    """A finding whose path is not a unit of the project that produced it."""

    checker: str
    project: str
    finding: Finding

    def render(self) -> str:
        """Return a one-line description suitable for logging."""

        return (
            f"Checker {self.checker} reported {self.finding.code} at {self.finding.path}, "
            f"which is not part of project {self.project}; finding rejected"
        )


@dataclass(frozen=True, slots=True)
class ProjectResult:
    """Findings, failures and rejections accumulated for one project."""

    project: Project
    findings: tuple[Finding, ...] = ()
    failures: tuple[AnalysisFailure, ...] = ()
    rejected: tuple[RejectedFinding, ...] = ()


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Outcome of a full run, with projects in workspace order."""

    workspace: Workspace
    projects: tuple[ProjectResult, ...] = ()

    @property
    def finding_count(self) -> int:
        """Return the number of accepted findings across all projects."""

        return sum(len(result.findings) for result in self.projects)

    @property
    def failures(self) -> tuple[AnalysisFailure, ...]:
        """Return every isolated checker failure in run order."""

        return tuple(failure for result in self.projects for failure in result.failures)

    @property
    def rejected(self) -> tuple[RejectedFinding, ...]:
        """Return every rejected finding in run order."""

        return tuple(rejection for result in self.projects for rejection in result.rejected)


__all__ = ["AnalysisFailure", "AnalysisResult", "ProjectResult", "RejectedFinding"]
