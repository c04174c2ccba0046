# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command for merging manifests and building missing releases."""

from __future__ import annotations

from pathlib import Path

import typer

from ..errors import XdcStoreError
from ..orchestrator import GenerationResult, generate
from ._generate_cli_models import (
    DRY_RUN_OPTION,
    ENGINE_OPTION,
    VERIFY_OPTION,
    GenerateOptions,
    build_generate_options,
)
from .shared import (
    APPS_DIR_OPTION,
    BUILD_DIR_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    ROOT_OPTION,
    CLILogger,
    build_cli_logger,
    load_config,
)


def generate_command(
    root: ROOT_OPTION = Path("."),
    config_file: CONFIG_OPTION = None,
    apps_dir: APPS_DIR_OPTION = None,
    build_dir: BUILD_DIR_OPTION = None,
    engine: ENGINE_OPTION = None,
    verify_artifacts: VERIFY_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Merge application manifests into the catalog and build missing releases."""

    options = build_generate_options(
        root=root,
        config_file=config_file,
        apps_dir=apps_dir,
        build_dir=build_dir,
        engine=engine,
        verify_artifacts=verify_artifacts,
        dry_run=dry_run,
        emoji=emoji,
    )
    _run_generate(options)


def _run_generate(options: GenerateOptions) -> None:
    """Run the generation workflow and exit non-zero on any fatal error."""

    logger = build_cli_logger(emoji=options.use_emoji)
    try:
        config = load_config(options.root, config_file=options.config_file, overrides=options.overrides())
        result = generate(config, dry_run=options.dry_run, use_emoji=options.use_emoji)
    except XdcStoreError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    _emit_summary(result, dry_run=options.dry_run, logger=logger)


def _emit_summary(result: GenerationResult, *, dry_run: bool, logger: CLILogger) -> None:
    logger.section("Summary")
    if result.traversal_error is not None:
        logger.warn("Manifest scan stopped early; rerun once the directory is readable.")
    if dry_run:
        logger.ok(
            f"DRY RUN: {len(result.merged)} manifest(s), {len(result.planned)} pending build(s), "
            f"{len(result.skipped)} already built",
        )
        return
    logger.ok(
        f"Catalog updated: {len(result.merged)} manifest(s), {len(result.built)} new build(s), "
        f"{len(result.skipped)} already built",
    )


__all__ = ["generate_command"]
