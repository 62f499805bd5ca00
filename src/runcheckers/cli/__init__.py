# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""runcheckers CLI package exports."""

from __future__ import annotations

from .app import app, main
from .command import RunOptions, run_checkers

__all__ = ["RunOptions", "app", "main", "run_checkers"]
