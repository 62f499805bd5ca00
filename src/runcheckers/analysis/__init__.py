# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Analysis runner and result containers."""

from __future__ import annotations

from .results import AnalysisFailure, AnalysisResult, ProjectResult, RejectedFinding
from .runner import AnalysisRunner

__all__ = ["AnalysisFailure", "AnalysisResult", "AnalysisRunner", "ProjectResult", "RejectedFinding"]
