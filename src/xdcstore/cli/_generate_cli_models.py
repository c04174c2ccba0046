# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the generate CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

ENGINE_OPTION = Annotated[
    str | None,
    typer.Option("--engine", help="Container engine used for builds (docker, podman)."),
]
VERIFY_OPTION = Annotated[
    bool,
    typer.Option(
        "--verify-artifacts",
        help="Warn when files referenced by existing build records are missing.",
    ),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="List pending builds without building or saving."),
]


@dataclass(slots=True)
class GenerateOptions:
    """Normalised CLI inputs for the generate workflow."""

    root: Path
    config_file: Path | None
    apps_dir: Path | None
    build_dir: Path | None
    engine: str | None
    verify_artifacts: bool
    dry_run: bool
    use_emoji: bool

    def overrides(self) -> dict[str, Any]:
        """Return configuration overrides supplied on the command line."""

        return {
            "apps_dir": self.apps_dir,
            "build_dir": self.build_dir,
            "container_engine": self.engine,
            # The flag can only switch verification on; configuration may too.
            "verify_artifacts": True if self.verify_artifacts else None,
        }


def build_generate_options(
    *,
    root: Path,
    config_file: Path | None,
    apps_dir: Path | None,
    build_dir: Path | None,
    engine: str | None,
    verify_artifacts: bool,
    dry_run: bool,
    emoji: bool,
) -> GenerateOptions:
    """Construct ``GenerateOptions`` from Typer parameters."""

    return GenerateOptions(
        root=root.resolve(),
        config_file=config_file.resolve() if config_file is not None else None,
        apps_dir=apps_dir,
        build_dir=build_dir,
        engine=engine.strip() if engine else None,
        verify_artifacts=verify_artifacts,
        dry_run=dry_run,
        use_emoji=emoji,
    )


__all__ = [
    "DRY_RUN_OPTION",
    "ENGINE_OPTION",
    "VERIFY_OPTION",
    "GenerateOptions",
    "build_generate_options",
]
