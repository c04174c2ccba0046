# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Derive publish-tree locations for catalog artifacts.

Catalog documents store POSIX paths relative to the publish root:
``<id>/<tag>/<id>.tar.gz`` and ``<id>/<tag>/<id>.xdc`` for release artifacts
and ``<id>/<banner>`` for the banner image. These helpers are the only place
that layout is spelled out.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..constants import ARCHIVE_EXTENSION, BUNDLE_EXTENSION


@dataclass(frozen=True, slots=True)
class ReleaseArtifactPaths:
    """Publish-relative locations of the two artifacts produced for a release."""

    source_archive: str
    bundle: str

    @property
    def directory(self) -> str:
        """Return the publish-relative directory holding both artifacts."""

        return posixpath.dirname(self.source_archive)


def _join(*parts: str) -> str:
    # Leading slashes are dropped so every part stays below the ones before it.
    joined = posixpath.normpath("/".join(part.strip("/") for part in parts if part.strip("/")))
    if joined == posixpath.pardir or joined.startswith(posixpath.pardir + "/"):
        raise ValueError(f"path '{joined}' escapes the publish tree")
    return joined


def release_artifact_paths(app_id: str, tag: str) -> ReleaseArtifactPaths:
    """Return the published artifact paths for ``app_id`` at ``tag``.

    Args:
        app_id: Application identity.
        tag: Release tag.

    Returns:
        ReleaseArtifactPaths: Source archive and bundle paths.

    Raises:
        ValueError: If the paths would leave the publish tree.
    """

    return ReleaseArtifactPaths(
        source_archive=_join(app_id, tag, f"{app_id}{ARCHIVE_EXTENSION}"),
        bundle=_join(app_id, tag, f"{app_id}{BUNDLE_EXTENSION}"),
    )


def banner_path(app_id: str, banner: str) -> str:
    """Return the banner location for ``app_id``, ignoring where the manifest lives.

    An absolute ``banner`` is taken relative to the application directory.

    Raises:
        ValueError: If the banner would leave the publish tree.
    """

    return _join(app_id, banner)


def normalize_publish_path(relative: str) -> str:
    """Return ``relative`` normalized below the publish root.

    Raises:
        ValueError: If ``relative`` points outside the publish tree.
    """

    return _join(relative)


def publish_location(publish_root: Path, relative: str) -> Path:
    """Return the filesystem path for a publish-relative POSIX ``relative`` path.

    Raises:
        ValueError: If ``relative`` points outside the publish tree.
    """

    return publish_root.joinpath(*PurePosixPath(_join(relative)).parts)


__all__ = [
    "ReleaseArtifactPaths",
    "banner_path",
    "normalize_publish_path",
    "publish_location",
    "release_artifact_paths",
]
