# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Analyzer plugin loading, checker discovery and failure classification."""

from __future__ import annotations

from ..checkers import Checker
from .failures import LoadFailure, LoadFailureKind, classify_load_failure
from .loader import (
    CHECKERS_PLUGIN_GROUP,
    FileModuleLoader,
    ImportModuleLoader,
    ModuleLoader,
    load_analyzer_module,
    load_entry_point_plugins,
)
from .registry import discover, discover_many


def load_checkers(
    reference: str,
    *,
    include_installed: bool = False,
    loader: ModuleLoader | None = None,
) -> tuple[Checker, ...]:
    """Load the analyzer at ``reference`` and instantiate its checkers.

    Args:
        reference: Filesystem path or dotted module name of the analyzer.
        include_installed: Also instantiate checkers contributed through the
            ``runcheckers.checkers`` entry-point group.
        loader: Optional loader overriding the automatic selection.

    Returns:
        tuple[Checker, ...]: Checker instances, analyzer checkers first.

    Raises:
        PluginLoadError: If the analyzer or an entry point cannot be loaded.
        PluginConfigurationError: If a checker cannot be instantiated.
    """

    module = load_analyzer_module(reference, loader=loader)
    if not include_installed:
        return discover(module)
    return discover_many((module, *load_entry_point_plugins()))


__all__ = [
    "CHECKERS_PLUGIN_GROUP",
    "FileModuleLoader",
    "ImportModuleLoader",
    "LoadFailure",
    "LoadFailureKind",
    "ModuleLoader",
    "classify_load_failure",
    "discover",
    "discover_many",
    "load_analyzer_module",
    "load_checkers",
    "load_entry_point_plugins",
]
