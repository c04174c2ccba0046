# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem scanning utilities for application manifests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..constants import MANIFEST_SUFFIX
from ..errors import ScanTraversalError
from .io import load_manifest
from .models import ApplicationManifest

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScannedManifest:
    """Manifest paired with the directory it was discovered in."""

    manifest: ApplicationManifest
    path: Path

    @property
    def directory(self) -> Path:
        """Return the directory holding the manifest file."""

        return self.path.parent

    @property
    def banner_source(self) -> Path:
        """Return the banner file, resolved below the manifest directory."""

        return self.directory / self.manifest.banner.lstrip("/")


@dataclass(slots=True)
class ManifestScanner:
    """Walk ``root`` and yield every manifest found beneath it.

    Iterating the scanner starts a new walk each time, so the sequence can be
    replayed. Entries are visited depth first in lexical name order. Symlinked
    directories are treated as files and never descended into.
    """

    root: Path
    suffix: str = MANIFEST_SUFFIX

    def __iter__(self) -> Iterator[ScannedManifest]:
        for path in self.manifest_paths():
            LOGGER.debug("loading manifest path=%s", path)
            yield ScannedManifest(manifest=load_manifest(path), path=path)

    def manifest_paths(self) -> Iterator[Path]:
        """Yield manifest file paths lazily in traversal order.

        Raises:
            ScanTraversalError: If a directory cannot be listed; the walk stops there.
        """

        yield from self._walk(self.root)

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as handle:
                entries = sorted(handle, key=lambda entry: entry.name)
        except OSError as exc:
            raise ScanTraversalError(directory, exc) from exc
        for entry in entries:
            path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(path)
            elif entry.name.endswith(self.suffix):
                yield path


__all__ = ["ManifestScanner", "ScannedManifest"]
