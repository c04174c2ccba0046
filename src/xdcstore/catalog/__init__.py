# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Application catalog models, discovery and persistence."""

from __future__ import annotations

from .checksum import compute_file_checksum
from .models import ApplicationManifest, BuildRecord, Catalog, CatalogEntry, ReleaseSpec
from .paths import ReleaseArtifactPaths, banner_path, publish_location, release_artifact_paths
from .resolution import MissingArtifact, ReleasePlan, find_missing_artifacts, resolve_releases
from .scanner import ManifestScanner, ScannedManifest
from .store import CatalogStore

__all__ = [
    "ApplicationManifest",
    "BuildRecord",
    "Catalog",
    "CatalogEntry",
    "CatalogStore",
    "ManifestScanner",
    "MissingArtifact",
    "ReleaseArtifactPaths",
    "ReleasePlan",
    "ReleaseSpec",
    "ScannedManifest",
    "banner_path",
    "compute_file_checksum",
    "find_missing_artifacts",
    "publish_location",
    "release_artifact_paths",
    "resolve_releases",
]
