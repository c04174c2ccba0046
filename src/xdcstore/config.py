# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for catalog generation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    CATALOG_FILENAME,
    DEFAULT_APPS_DIR,
    DEFAULT_BUILD_DIR,
    DEFAULT_CONTAINER_ENGINE,
    MANIFEST_SUFFIX,
)
from .errors import ConfigurationError


class ConfigError(ConfigurationError):
    """Raised when configuration input is invalid."""


class XdcStoreConfig(BaseModel):
    """Settings controlling where manifests are read and artifacts published."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    apps_dir: Path = Field(default_factory=lambda: Path(DEFAULT_APPS_DIR))
    build_dir: Path = Field(default_factory=lambda: Path(DEFAULT_BUILD_DIR))
    catalog_filename: str = CATALOG_FILENAME
    manifest_suffix: str = MANIFEST_SUFFIX
    container_engine: str = DEFAULT_CONTAINER_ENGINE
    verify_artifacts: bool = False

    @field_validator("catalog_filename")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in {".", ".."}:
            raise ValueError("catalog_filename must be a plain file name")
        return value

    @field_validator("manifest_suffix", "container_engine")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("value must not be empty")
        return value

    @property
    def catalog_path(self) -> Path:
        """Return the location of the persisted catalog document."""

        return self.build_dir / self.catalog_filename

    def resolved(self, root: Path) -> XdcStoreConfig:
        """Return a copy whose directories are absolute, anchored at ``root``."""

        return self.model_copy(
            update={
                "apps_dir": _anchor(self.apps_dir, root),
                "build_dir": _anchor(self.build_dir, root),
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a TOML-compatible mapping of the configuration."""

        return self.model_dump(mode="json")


def _anchor(path: Path, root: Path) -> Path:
    expanded = path.expanduser()
    return expanded if expanded.is_absolute() else (root / expanded).resolve()


__all__ = ["ConfigError", "XdcStoreConfig"]
