# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, configuration, options)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from ..config import XdcStoreConfig
from ..config_loader import ConfigLoader
from ..console import detect_tty, get_console_manager
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn

ROOT_OPTION = Annotated[
    Path,
    typer.Option(
        "--root",
        "-r",
        help="Repository root holding the apps and build directories.",
        show_default=False,
    ),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--config",
        help="Configuration file to use instead of <root>/xdcstore.toml.",
    ),
]
APPS_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--apps-dir", help="Directory scanned for application manifests."),
]
BUILD_DIR_OPTION = Annotated[
    Path | None,
    typer.Option("--build-dir", help="Publish tree receiving artifacts and the catalog."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool

    @property
    def console(self) -> Console:
        """Return the console matching the emoji preference."""

        return get_console_manager().get(color=True, emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def section(self, title: str) -> None:
        core_section(title, use_color=detect_tty())


def build_cli_logger(*, emoji: bool) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference."""

    return CLILogger(use_emoji=emoji)


def load_config(
    root: Path,
    *,
    config_file: Path | None,
    overrides: dict[str, Any] | None = None,
) -> XdcStoreConfig:
    """Resolve the layered configuration for ``root`` with CLI ``overrides`` applied.

    Raises:
        ConfigError: If a configuration source is unreadable or invalid.
    """

    loader = ConfigLoader.for_root(root, project_config=config_file)
    return loader.load(overrides)


__all__ = [
    "APPS_DIR_OPTION",
    "BUILD_DIR_OPTION",
    "CONFIG_OPTION",
    "EMOJI_OPTION",
    "ROOT_OPTION",
    "CLILogger",
    "build_cli_logger",
    "load_config",
]
