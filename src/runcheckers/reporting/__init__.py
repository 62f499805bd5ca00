# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Report rendering."""

from __future__ import annotations

from enum import Enum

from .formatter import format_finding, format_project, format_report, relativize
from .json import format_json


class ReportFormat(str, Enum):
    """Enumerate the supported report formats."""

    TEXT = "text"
    JSON = "json"


__all__ = ["ReportFormat", "format_finding", "format_json", "format_project", "format_report", "relativize"]
