# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the CLI logging adapter."""

from __future__ import annotations

import pytest

from runcheckers.cli.shared import build_cli_logger


def test_debug_renders_fields_in_call_order(capsys: pytest.CaptureFixture[str]) -> None:
    logger = build_cli_logger(emoji=False, debug=True, no_color=True)

    logger.debug(analyzer="rules.py", checkers=2)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[debug] analyzer=rules.py checkers=2\n"


def test_debug_is_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    build_cli_logger(emoji=False).debug(analyzer="rules.py")

    assert capsys.readouterr().err == ""


def test_warnings_go_to_stderr_and_report_lines_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    logger = build_cli_logger(emoji=False, no_color=True)

    logger.warn("checker failed")
    logger.echo("x.py, line 1 RULE1: bad thing")

    captured = capsys.readouterr()
    assert captured.out == "x.py, line 1 RULE1: bad thing\n"
    assert captured.err == "checker failed\n"
