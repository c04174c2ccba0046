# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from xdcstore.config import ConfigError, XdcStoreConfig
from xdcstore.config_loader import ConfigLoader, DefaultConfigSource, PyProjectConfigSource, TomlConfigSource


def test_defaults_are_anchored_at_project_root(tmp_path: Path) -> None:
    cfg = ConfigLoader.for_root(tmp_path).load()

    assert cfg.apps_dir == (tmp_path / "apps").resolve()
    assert cfg.build_dir == (tmp_path / "build").resolve()
    assert cfg.catalog_path == (tmp_path / "build" / "meta.json").resolve()
    assert cfg.container_engine == "docker"
    assert cfg.manifest_suffix == ".json"
    assert cfg.verify_artifacts is False


def test_project_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "store"

[tool.xdcstore]
build_dir = "public"
container_engine = "podman"
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / "xdcstore.toml").write_text('container_engine = "nerdctl"\n', encoding="utf-8")

    cfg = ConfigLoader.for_root(tmp_path).load()

    assert cfg.build_dir == (tmp_path / "public").resolve()
    assert cfg.container_engine == "nerdctl"


def test_cli_overrides_win_and_none_values_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "xdcstore.toml").write_text('apps_dir = "manifests"\nverify_artifacts = true\n', encoding="utf-8")

    cfg = ConfigLoader.for_root(tmp_path).load(
        {"apps_dir": None, "build_dir": Path("out"), "verify_artifacts": None},
    )

    assert cfg.apps_dir == (tmp_path / "manifests").resolve()
    assert cfg.build_dir == (tmp_path / "out").resolve()
    assert cfg.verify_artifacts is True


def test_explicit_config_file_replaces_project_file(tmp_path: Path) -> None:
    (tmp_path / "xdcstore.toml").write_text('container_engine = "nerdctl"\n', encoding="utf-8")
    explicit = tmp_path / "ci.toml"
    explicit.write_text('container_engine = "podman"\n', encoding="utf-8")

    cfg = ConfigLoader.for_root(tmp_path, project_config=explicit).load()

    assert cfg.container_engine == "podman"


def test_absolute_directories_are_kept(tmp_path: Path) -> None:
    elsewhere = tmp_path / "elsewhere"
    project = tmp_path / "project"
    project.mkdir()

    cfg = ConfigLoader.for_root(project).load({"build_dir": elsewhere})

    assert cfg.build_dir == elsewhere


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "xdcstore.toml").write_text('unknown_setting = 1\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="unknown_setting"):
        ConfigLoader.for_root(tmp_path).load()


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"catalog_filename": "nested/meta.json"}, "catalog_filename"),
        ({"container_engine": "  "}, "container_engine"),
        ({"manifest_suffix": ""}, "manifest_suffix"),
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, overrides: dict[str, str], field: str) -> None:
    with pytest.raises(ConfigError, match=field):
        ConfigLoader.for_root(tmp_path).load(overrides)


def test_malformed_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "xdcstore.toml").write_text("build_dir = [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Cannot read configuration"):
        ConfigLoader.for_root(tmp_path).load()


def test_pyproject_without_section_contributes_nothing(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[tool.other]\nvalue = 1\n', encoding="utf-8")

    assert PyProjectConfigSource(pyproject).load() == {}
    assert TomlConfigSource(tmp_path / "missing.toml").load() == {}


def test_loader_requires_a_source(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        ConfigLoader(project_root=tmp_path, sources=[])


def test_default_source_round_trips_through_the_model() -> None:
    assert XdcStoreConfig.model_validate(DefaultConfigSource().load()) == XdcStoreConfig()
