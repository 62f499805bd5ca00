# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run configuration model and loading helpers.

Settings are layered: built-in defaults, then the ``[tool.runcheckers]`` table
of the workspace descriptor, then explicit CLI overrides. Keys may be written
with dashes or underscores.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

TOOL_KEY: Final[str] = "tool"
SECTION_KEY: Final[str] = "runcheckers"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class WorkspaceDiagnosticPolicy(str, Enum):
    """Enumerate how non-fatal workspace load problems are handled."""

    DROP = "drop"
    WARN = "warn"


class RunConfig(BaseModel):
    """Settings controlling workspace loading and checker execution."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    projects: tuple[str, ...] | None = None
    exclude: tuple[str, ...] = ()
    workspace_diagnostics: WorkspaceDiagnosticPolicy = WorkspaceDiagnosticPolicy.DROP
    isolate_failures: bool = True
    sort_findings: bool = False
    jobs: int = Field(default=1, ge=1)


def descriptor_section(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return the normalised ``[tool.runcheckers]`` table of ``document``.

    Args:
        document: Parsed workspace descriptor.

    Returns:
        dict[str, Any]: Table contents with dashed keys converted to
        underscores, or an empty mapping when the table is absent.

    Raises:
        ConfigError: If ``tool`` or ``tool.runcheckers`` is not a table.
    """

    tool_section = document.get(TOOL_KEY, {})
    if not isinstance(tool_section, Mapping):
        raise ConfigError(f"[{TOOL_KEY}] must be a table")
    section = tool_section.get(SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{TOOL_KEY}.{SECTION_KEY}] must be a table")
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def load_run_config(
    document: Mapping[str, Any] | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> RunConfig:
    """Build the effective :class:`RunConfig`.

    Args:
        document: Parsed workspace descriptor, if any.
        overrides: CLI-supplied values; ``None`` entries are ignored.

    Returns:
        RunConfig: Validated configuration.

    Raises:
        ConfigError: If the merged settings fail validation.
    """

    merged: dict[str, Any] = descriptor_section(document) if document is not None else {}
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return RunConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [{TOOL_KEY}.{SECTION_KEY}] configuration: {exc}") from exc


__all__ = [
    "ConfigError",
    "RunConfig",
    "WorkspaceDiagnosticPolicy",
    "descriptor_section",
    "load_run_config",
]
