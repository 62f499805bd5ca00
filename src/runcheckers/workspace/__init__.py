# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Workspace models and the compilation graph provider."""

from __future__ import annotations

from .models import (
    IdentityPositionMapper,
    PositionMapper,
    Project,
    SourceUnit,
    Workspace,
    WorkspaceDiagnostic,
    WorkspaceDiagnosticKind,
)
from .provider import (
    CompilationGraphProvider,
    PyProjectWorkspaceProvider,
    WorkspaceDiagnosticHandler,
    read_descriptor,
)

__all__ = [
    "CompilationGraphProvider",
    "IdentityPositionMapper",
    "PositionMapper",
    "Project",
    "PyProjectWorkspaceProvider",
    "SourceUnit",
    "Workspace",
    "WorkspaceDiagnostic",
    "WorkspaceDiagnosticHandler",
    "WorkspaceDiagnosticKind",
    "read_descriptor",
]
