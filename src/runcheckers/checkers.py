# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Checker capability implemented by analyzer plugins.

A plugin module exports one or more concrete :class:`Checker` subclasses.
Each is instantiated once per run with no arguments and then invoked for every
source unit in the workspace, so implementations must not keep per-unit state
on ``self``.

Example::

    import ast

    from runcheckers import Checker


    class NoPrintChecker(Checker):
        codes = ("RC001",)

        def check(self, unit):
            for node in ast.walk(unit.tree):
                if isinstance(node, ast.Call) and getattr(node.func, "id", None) == "print":
                    yield unit.finding(node, "RC001", "print() call")
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, ClassVar

from .models import Finding

if TYPE_CHECKING:
    from .workspace.models import SourceUnit


class Checker(ABC):
    """Analyze a single source unit and yield findings."""

    codes: ClassVar[tuple[str, ...]] = ()

    @property
    def name(self) -> str:
        """Return the display name of the checker."""

        return type(self).__name__

    @abstractmethod
    def check(self, unit: SourceUnit) -> Iterable[Finding]:
        """Yield findings for ``unit``.

        Args:
            unit: Parsed source unit exposing ``tree``, ``source`` and the
                mapped-position helpers.

        Returns:
            Iterable[Finding]: Findings in the order the checker discovers them.
        """


def is_checker_class(candidate: object) -> bool:
    """Return ``True`` when ``candidate`` is a concrete checker class.

    Args:
        candidate: Object exported by a plugin module.

    Returns:
        bool: ``True`` for non-abstract subclasses of :class:`Checker`.
    """

    return (
        inspect.isclass(candidate)
        and issubclass(candidate, Checker)
        and candidate is not Checker
        and not inspect.isabstract(candidate)
    )


__all__ = ["Checker", "is_checker_class"]
