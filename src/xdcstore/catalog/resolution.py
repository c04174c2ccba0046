# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decide which declared releases still need a build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .models import ApplicationManifest, CatalogEntry
from .paths import publish_location


@dataclass(slots=True)
class ReleasePlan:
    """Partition of a manifest's release tags into pending and skipped."""

    app_id: str
    pending: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class MissingArtifact:
    """A build record whose published file is no longer present."""

    app_id: str
    tag: str
    path: str


def resolve_releases(entry: CatalogEntry, manifest: ApplicationManifest) -> ReleasePlan:
    """Return which of ``manifest``'s release tags still need building.

    A tag with an existing build record is considered complete and is never
    re-attempted or re-verified here.

    Args:
        entry: Catalog entry for the manifest's application.
        manifest: Freshly scanned manifest declaring the releases.

    Returns:
        ReleasePlan: Tags in declaration order, split into pending and skipped.
    """

    plan = ReleasePlan(app_id=manifest.unique_id)
    for tag in manifest.releases:
        if tag in entry.releases:
            plan.skipped.append(tag)
        else:
            plan.pending.append(tag)
    return plan


def find_missing_artifacts(entry: CatalogEntry, publish_root: Path) -> list[MissingArtifact]:
    """Return published files referenced by ``entry``'s build records that are gone.

    Only reports the discrepancy; records are left as they are.
    """

    missing: list[MissingArtifact] = []
    for tag in sorted(entry.releases):
        record = entry.releases[tag]
        for relative in (record.source_tarball, record.bundle):
            if not publish_location(publish_root, relative).is_file():
                missing.append(MissingArtifact(app_id=entry.unique_id, tag=tag, path=relative))
    return missing


__all__ = ["MissingArtifact", "ReleasePlan", "find_missing_artifacts", "resolve_releases"]
