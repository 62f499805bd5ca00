# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""The ``runcheckers`` command: load checkers, open the workspace, report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..analysis import AnalysisResult, AnalysisRunner
from ..checkers import Checker
from ..config import ConfigError, RunConfig, WorkspaceDiagnosticPolicy, load_run_config
from ..errors import AnalysisError, PluginConfigurationError, PluginLoadError, WorkspaceLoadError
from ..plugins import load_checkers
from ..reporting import ReportFormat, format_json, format_report
from ..workspace import CompilationGraphProvider, PyProjectWorkspaceProvider, read_descriptor
from .shared import CLIError, CLILogger, build_cli_logger

ProviderFactory = Callable[[RunConfig, CLILogger], CompilationGraphProvider]


@dataclass(frozen=True, slots=True)
class RunOptions:
    """CLI settings layered over the descriptor configuration."""

    workspace_diagnostics: WorkspaceDiagnosticPolicy | None = None
    strict: bool = False
    sort: bool = False
    jobs: int | None = None
    installed: bool = False
    report_format: ReportFormat = ReportFormat.TEXT

    def overrides(self) -> dict[str, Any]:
        """Return configuration overrides; unset options map to ``None``."""

        return {
            "workspace_diagnostics": self.workspace_diagnostics,
            "isolate_failures": False if self.strict else None,
            "sort_findings": True if self.sort else None,
            "jobs": self.jobs,
        }


def default_provider(config: RunConfig, logger: CLILogger) -> CompilationGraphProvider:
    """Return the ``pyproject.toml`` workspace provider wired to ``logger``."""

    return PyProjectWorkspaceProvider(config, warn=logger.warn)


def run_checkers(
    solution_path: Path,
    analyzer_path: str,
    *,
    options: RunOptions | None = None,
    logger: CLILogger | None = None,
    provider_factory: ProviderFactory = default_provider,
) -> int:
    """Run the analyzer's checkers over the workspace and print the report.

    The analyzer is loaded and its checkers instantiated before the workspace
    descriptor is touched, so plugin failures never open a partial workspace.

    Args:
        solution_path: Workspace descriptor path.
        analyzer_path: Analyzer module path or dotted name.
        options: CLI overrides and output settings.
        logger: Logger for stderr diagnostics and stdout report lines.
        provider_factory: Builds the compilation graph provider for the run.

    Returns:
        int: ``0`` when the run completes, ``1`` on a fatal error.
    """

    active_options = options or RunOptions()
    active_logger = logger or build_cli_logger(emoji=False)
    try:
        checkers = _load(analyzer_path, active_options, active_logger)
        result = _analyze(solution_path, checkers, active_options, active_logger, provider_factory)
    except CLIError as exc:
        active_logger.fail(str(exc))
        return exc.exit_code

    _emit_report(result, active_options.report_format, active_logger)
    for failure in result.failures:
        active_logger.warn(failure.render())
    for rejection in result.rejected:
        active_logger.warn(rejection.render())
    active_logger.debug(
        projects=len(result.projects),
        findings=result.finding_count,
        failures=len(result.failures),
        rejected=len(result.rejected),
    )
    return 0


def _load(analyzer_path: str, options: RunOptions, logger: CLILogger) -> tuple[Checker, ...]:
    try:
        checkers = load_checkers(analyzer_path, include_installed=options.installed)
    except (PluginLoadError, PluginConfigurationError) as exc:
        raise CLIError(str(exc)) from exc
    logger.debug(analyzer=analyzer_path, checkers=len(checkers))
    return checkers


def _analyze(
    solution_path: Path,
    checkers: tuple[Checker, ...],
    options: RunOptions,
    logger: CLILogger,
    provider_factory: ProviderFactory,
) -> AnalysisResult:
    try:
        document = read_descriptor(solution_path.expanduser())
        config = load_run_config(document, overrides=options.overrides())
        workspace = provider_factory(config, logger).open(solution_path)
        logger.debug(workspace=workspace.path, projects=len(workspace.projects), jobs=config.jobs)
        return AnalysisRunner.from_config(config).run(workspace, checkers)
    except (WorkspaceLoadError, ConfigError, AnalysisError) as exc:
        raise CLIError(str(exc)) from exc


def _emit_report(result: AnalysisResult, report_format: ReportFormat, logger: CLILogger) -> None:
    if report_format is ReportFormat.JSON:
        logger.echo(format_json(result))
        return
    for line in format_report(result):
        logger.echo(line)


def run_command(
    ctx: typer.Context,
    solution_path: Annotated[
        Path | None,
        typer.Argument(help="Workspace descriptor: a TOML file declaring the projects to analyse."),
    ] = None,
    analyzer_path: Annotated[
        str | None,
        typer.Argument(help="Analyzer module: a .py file, a package directory or a dotted module name."),
    ] = None,
    workspace_diagnostics: Annotated[
        WorkspaceDiagnosticPolicy | None,
        typer.Option("--workspace-diagnostics", help="Drop or warn about non-fatal workspace load problems."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort on the first checker failure instead of isolating it."),
    ] = False,
    sort: Annotated[
        bool,
        typer.Option("--sort", help="Sort findings within each file by line, column and code."),
    ] = False,
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", min=1, help="Number of files analysed concurrently per project."),
    ] = None,
    installed: Annotated[
        bool,
        typer.Option("--installed", help="Also run checkers registered under the runcheckers.checkers entry point."),
    ] = False,
    report_format: Annotated[
        ReportFormat,
        typer.Option("--format", help="Report format written to stdout."),
    ] = ReportFormat.TEXT,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate stderr messages with emoji.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured stderr output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print debug details to stderr.")] = False,
) -> None:
    """Run every checker in ANALYZER_PATH over the projects of SOLUTION_PATH."""

    if solution_path is None and analyzer_path is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)
    if solution_path is None or analyzer_path is None:
        raise typer.BadParameter("argument is required", param_hint="ANALYZER_PATH")

    options = RunOptions(
        workspace_diagnostics=workspace_diagnostics,
        strict=strict,
        sort=sort,
        jobs=jobs,
        installed=installed,
        report_format=report_format,
    )
    logger = build_cli_logger(emoji=emoji, debug=debug, no_color=no_color)
    exit_code = run_checkers(solution_path, analyzer_path, options=options, logger=logger)
    raise typer.Exit(code=exit_code)


__all__ = ["RunOptions", "default_provider", "run_checkers", "run_command"]
