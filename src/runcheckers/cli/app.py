# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import typer

from .command import run_command

app = typer.Typer(
    name="runcheckers",
    help="Run analyzer checkers across every project of a workspace.",
    add_completion=False,
)
app.command()(run_command)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
