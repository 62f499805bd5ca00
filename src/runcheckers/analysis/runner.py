# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run checkers over every unit of a workspace and bucket findings per project."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from ..checkers import Checker
from ..config import RunConfig
from ..errors import AnalysisError
from ..models import Finding
from ..workspace.models import Project, SourceUnit, Workspace
from .results import AnalysisFailure, AnalysisResult, ProjectResult, RejectedFinding


@dataclass(slots=True)
class UnitOutcome:
    """Findings and problems collected for a single unit."""

    findings: list[Finding] = field(default_factory=list)
    failures: list[AnalysisFailure] = field(default_factory=list)
    rejected: list[RejectedFinding] = field(default_factory=list)


class AnalysisRunner:
    """Apply checkers to projects, units and checkers in discovery order.

    With ``isolate_failures`` enabled a checker that raises on one unit is
    recorded as an :class:`AnalysisFailure` and the run continues; otherwise
    the first failure raises :class:`AnalysisError`. Findings keep the order
    the checker yields them unless ``sort_findings`` is set, in which case each
    unit's findings are ordered by line, column and code. ``jobs`` greater than
    one analyses the units of a project concurrently; the reported order is
    the same as a sequential run.
    """

    def __init__(self, *, isolate_failures: bool = True, sort_findings: bool = False, jobs: int = 1) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.isolate_failures = isolate_failures
        self.sort_findings = sort_findings
        self.jobs = jobs

    @classmethod
    def from_config(cls, config: RunConfig) -> AnalysisRunner:
        """Return a runner configured from ``config``."""

        return cls(isolate_failures=config.isolate_failures, sort_findings=config.sort_findings, jobs=config.jobs)

    def run(self, workspace: Workspace, checkers: Sequence[Checker]) -> AnalysisResult:
        """Run ``checkers`` against every project of ``workspace``.

        Args:
            workspace: Loaded workspace.
            checkers: Checker instances in discovery order.

        Returns:
            AnalysisResult: Per-project results in workspace order.

        Raises:
            AnalysisError: If a checker raises and failures are not isolated.
        """

        return AnalysisResult(
            workspace=workspace,
            projects=tuple(self.run_project(project, checkers) for project in workspace.projects),
        )

    def run_project(self, project: Project, checkers: Sequence[Checker]) -> ProjectResult:
        """Run ``checkers`` against every unit of ``project``.

        Args:
            project: Project whose units are analysed.
            checkers: Checker instances in discovery order.

        Returns:
            ProjectResult: Findings accumulated across all units and checkers.
        """

        owned = project.unit_paths()
        if self.jobs > 1 and len(project.units) > 1:
            outcomes = self._run_units_concurrently(project, checkers, owned)
        else:
            outcomes = [self.run_unit(unit, checkers, project=project, owned=owned) for unit in project.units]

        findings: list[Finding] = []
        failures: list[AnalysisFailure] = []
        rejected: list[RejectedFinding] = []
        for outcome in outcomes:
            findings.extend(outcome.findings)
            failures.extend(outcome.failures)
            rejected.extend(outcome.rejected)
        return ProjectResult(
            project=project,
            findings=tuple(findings),
            failures=tuple(failures),
            rejected=tuple(rejected),
        )

    def run_unit(
        self,
        unit: SourceUnit,
        checkers: Sequence[Checker],
        *,
        project: Project,
        owned: frozenset[str],
    ) -> UnitOutcome:
        """Run every checker against ``unit``.

        Args:
            unit: Unit under analysis.
            checkers: Checker instances in discovery order.
            project: Project that owns ``unit``.
            owned: Unit paths belonging to ``project``.

        Returns:
            UnitOutcome: Accepted findings, isolated failures and rejections.
        """

        outcome = UnitOutcome()
        for checker in checkers:
            try:
                produced = _collect(checker, unit)
            except Exception as exc:
                if not self.isolate_failures:
                    raise AnalysisError(checker.name, unit.path, exc) from exc
                outcome.failures.append(AnalysisFailure(checker=checker.name, path=unit.path, error=exc))
                continue
            for finding in produced:
                if finding.path in owned:
                    outcome.findings.append(finding)
                else:
                    outcome.rejected.append(RejectedFinding(checker=checker.name, project=project.path, finding=finding))
        if self.sort_findings:
            outcome.findings.sort(key=Finding.sort_key)
        return outcome

    def _run_units_concurrently(
        self,
        project: Project,
        checkers: Sequence[Checker],
        owned: frozenset[str],
    ) -> list[UnitOutcome]:
        ordered: dict[int, UnitOutcome] = {}
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            future_map = {
                executor.submit(self.run_unit, unit, checkers, project=project, owned=owned): index
                for index, unit in enumerate(project.units)
            }
            for future in as_completed(future_map):
                ordered[future_map[future]] = future.result()
        return [ordered[index] for index in sorted(ordered)]


def _collect(checker: Checker, unit: SourceUnit) -> list[Finding]:
    produced: list[Finding] = []
    for item in checker.check(unit) or ():
        if not isinstance(item, Finding):
            raise TypeError(f"expected Finding, got {type(item).__name__}")
        produced.append(item)
    return produced


__all__ = ["AnalysisRunner", "UnitOutcome"]
