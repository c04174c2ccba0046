# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from .config import ConfigError, XdcStoreConfig

PROJECT_CONFIG_FILENAME: Final[str] = "xdcstore.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "xdcstore"


class ConfigSource(Protocol):
    """Provide a configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]: ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return XdcStoreConfig().to_dict()


class TomlConfigSource:
    """Load configuration data from a TOML document; a missing file contributes nothing."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read configuration at {self._path}: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self._path} must be a table")
        return data


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.xdcstore]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = super().load()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return section


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence.

    Later sources win. Relative directories in the result are anchored at the
    project root.
    """

    def __init__(self, *, project_root: Path, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)
        self._project_root = project_root.resolve()

    @classmethod
    def for_root(cls, project_root: Path, *, project_config: Path | None = None) -> ConfigLoader:
        """Build a loader reading defaults, ``pyproject.toml`` and ``xdcstore.toml``.

        Args:
            project_root: Directory used to discover configuration files.
            project_config: Optional explicit replacement for ``xdcstore.toml``.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        project_file = project_config if project_config is not None else root / PROJECT_CONFIG_FILENAME
        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(root / PYPROJECT_FILENAME),
            TomlConfigSource(project_file),
        ]
        return cls(project_root=root, sources=sources)

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        """Return the configured sources in precedence order."""

        return tuple(self._sources)

    def load(self, overrides: Mapping[str, Any] | None = None) -> XdcStoreConfig:
        """Return the merged configuration.

        Args:
            overrides: Highest-precedence values, typically from CLI options.
                ``None`` values are ignored.

        Returns:
            XdcStoreConfig: Configuration with absolute directories.

        Raises:
            ConfigError: If a source is unreadable or a value is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            merged.update(source.load())
        if overrides:
            merged.update({key: value for key, value in overrides.items() if value is not None})
        try:
            config = XdcStoreConfig.model_validate(merged)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ConfigError(f"Invalid configuration value for '{location}': {first['msg']}") from exc
        return config.resolved(self._project_root)


__all__ = [
    "PROJECT_CONFIG_FILENAME",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
