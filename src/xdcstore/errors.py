# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while generating the application catalog."""

from __future__ import annotations

from pathlib import Path


class XdcStoreError(RuntimeError):
    """Base class for every failure that should abort a catalog run."""


class ConfigurationError(XdcStoreError):
    """Raised when the input or output directories are unusable."""


class ManifestError(XdcStoreError):
    """Raised when an application manifest cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Create the error for ``path`` with a human readable ``reason``.

        Args:
            path: Manifest file that failed to load.
            reason: Short description of the failure.
        """

        super().__init__(f"{path}: {reason}")
        self.path = path


class CatalogError(XdcStoreError):
    """Raised when the persisted catalog is malformed or an invariant is violated."""


class BuildError(XdcStoreError):
    """Raised when the external build capability reports a failure."""

    def __init__(self, app_id: str, tag: str, returncode: int) -> None:
        super().__init__(f"build of {app_id} tag {tag} failed with exit status {returncode}")
        self.app_id = app_id
        self.tag = tag
        self.returncode = returncode


class ArtifactError(XdcStoreError):
    """Raised when a build artifact is missing, cannot be relocated or hashed."""


class ScanTraversalError(XdcStoreError):
    """Raised when the manifest tree walk cannot list a directory."""

    def __init__(self, directory: Path, cause: OSError) -> None:
        super().__init__(f"cannot traverse {directory}: {cause.strerror or cause}")
        self.directory = directory


__all__ = [
    "ArtifactError",
    "BuildError",
    "CatalogError",
    "ConfigurationError",
    "ManifestError",
    "ScanTraversalError",
    "XdcStoreError",
]
