# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the xdcstore command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from xdcstore.cli._generate_cli_models import build_generate_options
from xdcstore.cli.app import app

runner = CliRunner()


def test_generate_dry_run_lists_pending_builds(repo: Path, write_manifest, release) -> None:
    write_manifest("app1.json", "app1", releases={"v1": release(), "v2": release()})

    result = runner.invoke(app, ["generate", "--root", str(repo), "--dry-run", "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert "DRY RUN: would build app1 tag: v1" in result.stdout
    assert "--- Summary ---" in result.stdout
    assert "DRY RUN: 1 manifest(s), 2 pending build(s), 0 already built" in result.stdout
    assert not (repo / "build" / "meta.json").exists()


def test_generate_writes_catalog_for_manifests_without_releases(repo: Path, write_manifest) -> None:
    write_manifest("app1.json", "app1", name="First App")

    result = runner.invoke(app, ["generate", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert "Catalog updated: 1 manifest(s), 0 new build(s), 0 already built" in result.stdout
    document = json.loads((repo / "build" / "meta.json").read_text(encoding="utf-8"))
    assert document["apps"]["app1"]["name"] == "First App"
    assert document["apps"]["app1"]["releases"] == {}


def test_generate_honours_directory_overrides(tmp_path: Path) -> None:
    (tmp_path / "manifests").mkdir()
    (tmp_path / "public").mkdir()
    (tmp_path / "manifests" / "demo.json").write_text('{"uniqueId": "demo"}', encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "generate",
            "--root",
            str(tmp_path),
            "--apps-dir",
            "manifests",
            "--build-dir",
            "public",
            "--no-emoji",
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "demo" in json.loads((tmp_path / "public" / "meta.json").read_text(encoding="utf-8"))["apps"]


def test_generate_fails_when_directories_are_missing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["generate", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "are you in the correct repository?" in result.stdout


def test_generate_fails_on_malformed_manifest(repo: Path) -> None:
    (repo / "apps" / "broken.json").write_text("{", encoding="utf-8")

    result = runner.invoke(app, ["generate", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 1
    assert "broken.json" in result.stdout


def test_generate_reports_engine_that_cannot_be_executed(repo: Path, write_manifest, release) -> None:
    engine = repo / "engine"
    engine.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    engine.chmod(0o644)
    write_manifest("app1.json", "app1", releases={"v1": release()})

    result = runner.invoke(app, ["generate", "--root", str(repo), "--engine", str(engine), "--no-emoji"])

    assert result.exit_code == 1
    assert "cannot start" in result.stdout
    assert "exit status 126" in result.stdout


def test_generate_reports_invalid_configuration(repo: Path) -> None:
    (repo / "xdcstore.toml").write_text('catalog_filename = "a/b.json"\n', encoding="utf-8")

    result = runner.invoke(app, ["generate", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 1
    assert "catalog_filename" in result.stdout


def test_show_lists_catalog_entries(repo: Path, write_manifest) -> None:
    write_manifest("app1.json", "app1", name="First")
    write_manifest("app2.json", "app2", name="Second")
    assert runner.invoke(app, ["generate", "--root", str(repo), "--no-emoji"]).exit_code == 0

    result = runner.invoke(app, ["show", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert "app1" in result.stdout
    assert "Second" in result.stdout


def test_show_reports_empty_catalog(repo: Path) -> None:
    result = runner.invoke(app, ["show", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 0
    assert "is empty" in result.stdout


def test_show_rejects_malformed_catalog(repo: Path) -> None:
    (repo / "build" / "meta.json").write_text("[]", encoding="utf-8")

    result = runner.invoke(app, ["show", "--root", str(repo), "--no-emoji"])

    assert result.exit_code == 1
    assert "expected a JSON object" in result.stdout


def test_verify_flag_only_enables_verification(tmp_path: Path) -> None:
    enabled = build_generate_options(
        root=tmp_path,
        config_file=None,
        apps_dir=None,
        build_dir=None,
        engine=" podman ",
        verify_artifacts=True,
        dry_run=False,
        emoji=False,
    )
    disabled = build_generate_options(
        root=tmp_path,
        config_file=None,
        apps_dir=None,
        build_dir=None,
        engine=None,
        verify_artifacts=False,
        dry_run=False,
        emoji=False,
    )

    assert enabled.overrides()["verify_artifacts"] is True
    assert enabled.overrides()["container_engine"] == "podman"
    assert disabled.overrides()["verify_artifacts"] is None
