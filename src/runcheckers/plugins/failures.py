# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classification of analyzer module load failures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class LoadFailureKind(str, Enum):
    """Enumerate the load failure categories reported to the user."""

    MISSING = "missing"
    INCOMPATIBLE = "incompatible"
    MALFORMED = "malformed"
    ACCESS_DENIED = "access-denied"


_MESSAGES: Final[dict[LoadFailureKind, str]] = {
    LoadFailureKind.MISSING: "No analyzer module found at {artifact}",
    LoadFailureKind.INCOMPATIBLE: "Analyzer module at {artifact} could not be loaded.",
    LoadFailureKind.MALFORMED: "Analyzer module at {artifact} could not be loaded: malformed source.",
    LoadFailureKind.ACCESS_DENIED: "Analyzer module at {artifact} could not be loaded: access denied.",
}

_MISSING_ERRORS: Final[tuple[type[BaseException], ...]] = (
    FileNotFoundError,
    IsADirectoryError,
    NotADirectoryError,
)
_MALFORMED_ERRORS: Final[tuple[type[BaseException], ...]] = (SyntaxError, UnicodeDecodeError)


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """Classified failure naming the artifact that could not be loaded."""

    kind: LoadFailureKind
    artifact: str

    @property
    def message(self) -> str:
        """Return the fixed user-facing message for this failure."""

        return _MESSAGES[self.kind].format(artifact=self.artifact)


def classify_load_failure(error: BaseException, artifact: str) -> LoadFailure | None:
    """Map ``error`` raised while loading ``artifact`` to a failure category.

    A :class:`ModuleNotFoundError` only counts as a missing artifact when it
    names the requested module itself; one raised for a dependency imported by
    the plugin is an incompatible environment.

    Args:
        error: Exception raised by the module loader.
        artifact: Path or module name the user supplied.

    Returns:
        LoadFailure | None: Classified failure, or ``None`` when ``error`` is
        not a recognised load failure and must propagate.
    """

    kind: LoadFailureKind | None = None
    if isinstance(error, _MISSING_ERRORS):
        kind = LoadFailureKind.MISSING
    elif isinstance(error, PermissionError):
        kind = LoadFailureKind.ACCESS_DENIED
    elif isinstance(error, _MALFORMED_ERRORS):
        kind = LoadFailureKind.MALFORMED
    elif isinstance(error, ModuleNotFoundError) and _names_artifact(error.name, artifact):
        kind = LoadFailureKind.MISSING
    elif isinstance(error, ImportError):
        kind = LoadFailureKind.INCOMPATIBLE
    if kind is None:
        return None
    return LoadFailure(kind=kind, artifact=artifact)


def _names_artifact(missing: str | None, artifact: str) -> bool:
    """Return ``True`` when ``missing`` is ``artifact`` or one of its parent packages."""

    if not missing:
        return False
    return artifact == missing or artifact.startswith(f"{missing}.")


__all__ = ["LoadFailure", "LoadFailureKind", "classify_load_failure"]
