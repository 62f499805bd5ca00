# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run pluggable static-analysis checkers across a multi-project workspace."""

from __future__ import annotations

from importlib import metadata

from .checkers import Checker
from .models import Finding, Location
from .workspace.models import SourceUnit

__all__ = ["Checker", "Finding", "Location", "SourceUnit", "__version__"]

try:
    __version__ = metadata.version("runcheckers")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
