# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across xdcstore modules."""

from __future__ import annotations

from typing import Final

DEFAULT_APPS_DIR: Final[str] = "apps"
DEFAULT_BUILD_DIR: Final[str] = "build"
CATALOG_FILENAME: Final[str] = "meta.json"
MANIFEST_SUFFIX: Final[str] = ".json"

# Files the build container must leave in its output mount.
SOURCE_ARCHIVE_NAME: Final[str] = "source.tar.gz"
BUNDLE_NAME: Final[str] = "app.xdc"

# Published artifacts are named after the application identity.
ARCHIVE_EXTENSION: Final[str] = ".tar.gz"
BUNDLE_EXTENSION: Final[str] = ".xdc"

DEFAULT_CONTAINER_ENGINE: Final[str] = "docker"
CONTAINER_OUTPUT_DIR: Final[str] = "/out"
CONTAINER_BUILD_DIR: Final[str] = "/build"
CONTAINER_SHELL: Final[str] = "/bin/bash"

CHECKSUM_ALGORITHM: Final[str] = "sha512"
CHECKSUM_CHUNK_SIZE: Final[int] = 1024 * 1024

TEMP_BUILD_PREFIX: Final[str] = "tmpbld"
