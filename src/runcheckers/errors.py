# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the checker pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .plugins.failures import LoadFailure


class RunCheckersError(RuntimeError):
    """Base class for errors raised while running checkers."""


class PluginLoadError(RunCheckersError):
    """Raised when the analyzer module cannot be loaded."""

    def __init__(self, failure: LoadFailure) -> None:
        """Initialise the error from a classified load failure.

        Args:
            failure: Classified failure describing the artifact and category.
        """

        super().__init__(failure.message)
        self.failure = failure


class PluginConfigurationError(RunCheckersError):
    """Raised when a discovered checker class cannot be instantiated."""

    def __init__(self, checker: str, reason: str) -> None:
        """Initialise the error with the offending checker and the reason.

        Args:
            checker: Qualified name of the checker class.
            reason: Description of why instantiation failed.
        """

        super().__init__(f"Checker {checker} could not be instantiated: {reason}")
        self.checker = checker
        self.reason = reason


class WorkspaceLoadError(RunCheckersError):
    """Raised when the workspace descriptor cannot be opened."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Workspace at {path} could not be loaded: {reason}")
        self.path = path
        self.reason = reason


class AnalysisError(RunCheckersError):
    """Raised when a checker fails on a unit and failures are not isolated."""

    def __init__(self, checker: str, path: str, error: BaseException) -> None:
        """Initialise the error with the failing checker and unit.

        Args:
            checker: Name of the checker that raised.
            path: Path of the unit being analysed.
            error: Exception raised by the checker.
        """

        super().__init__(f"Checker {checker} failed on {path}: {error}")
        self.checker = checker
        self.path = path
        self.error = error


__all__ = [
    "AnalysisError",
    "PluginConfigurationError",
    "PluginLoadError",
    "RunCheckersError",
    "WorkspaceLoadError",
]
