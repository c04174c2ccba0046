# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command listing catalog entries and their built releases."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from ..catalog.store import CatalogStore
from ..errors import XdcStoreError
from .shared import BUILD_DIR_OPTION, CONFIG_OPTION, EMOJI_OPTION, ROOT_OPTION, build_cli_logger, load_config


def show_command(
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    build_dir: BUILD_DIR_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the applications recorded in the catalog."""

    logger = build_cli_logger(emoji=emoji)
    try:
        config = load_config(root.resolve(), config_file=config_file, overrides={"build_dir": build_dir})
        store = CatalogStore(config.catalog_path)
        store.load()
    except XdcStoreError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    if not len(store):
        logger.warn(f"Catalog at {store.path} is empty.")
        raise typer.Exit(code=0)

    table = Table(title=f"Catalog {store.path}")
    table.add_column("Application", style="bold")
    table.add_column("Name")
    table.add_column("Built releases")
    for entry in store:
        table.add_row(entry.unique_id, entry.name, ", ".join(sorted(entry.releases)) or "-")
    logger.console.print(table)


__all__ = ["show_command"]
