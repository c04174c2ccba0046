# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .generate import generate_command
from .show import show_command

app = typer.Typer(
    name="xdcstore",
    help="Incremental application catalog generator.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("generate")(generate_command)
app.command("show")(show_command)

__all__ = ["app"]
