# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the runcheckers package.

Positions are 1-indexed for both ``line`` and ``column``. Checkers that build
findings through :meth:`runcheckers.workspace.models.SourceUnit.finding` get
this convention for free; checkers constructing :class:`Finding` directly are
expected to follow it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Mapped source location of a finding."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)


class Finding(BaseModel):
    """Immutable issue reported by a checker against one source file."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)
    code: str
    message: str

    @classmethod
    def at(cls, location: Location, *, code: str, message: str) -> Finding:
        """Return a finding positioned at ``location``.

        Args:
            location: Mapped location produced by a source unit.
            code: Stable identifier assigned by the checker.
            message: Human-readable description of the issue.

        Returns:
            Finding: Finding carrying the location unchanged.
        """

        return cls(path=location.path, line=location.line, column=location.column, code=code, message=message)

    @property
    def location(self) -> Location:
        """Return the location component of the finding."""
        return Location(path=self.path, line=self.line, column=self.column)

    def sort_key(self) -> tuple[int, int, str]:
        """Return the key used when findings are sorted within a unit."""
        return (self.line, self.column, self.code)


__all__ = ["Finding", "Location"]
