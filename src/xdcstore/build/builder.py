# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build one release and relocate its artifacts into the publish tree."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from ..catalog.checksum import compute_file_checksum
from ..catalog.models import BuildRecord, ReleaseSpec
from ..catalog.paths import publish_location, release_artifact_paths
from ..catalog.scanner import ScannedManifest
from ..constants import BUNDLE_NAME, SOURCE_ARCHIVE_NAME, TEMP_BUILD_PREFIX
from ..errors import ArtifactError, BuildError
from ..logging import info, warn
from .capability import BuildCapability, BuildRequest


class ReleaseBuilder:
    """Produce the :class:`BuildRecord` for a single (application, tag) pair.

    Every invocation gets its own temporary output directory. A record is only
    returned once both artifacts sit at their published location and have been
    hashed; any earlier failure raises and leaves nothing to record.
    """

    def __init__(
        self,
        publish_root: Path,
        capability: BuildCapability,
        *,
        use_emoji: bool = True,
    ) -> None:
        """Create a builder publishing under ``publish_root``.

        Args:
            publish_root: Root of the published repository tree.
            capability: External build capability used to produce artifacts.
            use_emoji: Whether status output should include emoji glyphs.
        """

        self._publish_root = publish_root
        self._capability = capability
        self._use_emoji = use_emoji

    def build(self, scanned: ScannedManifest, tag: str, spec: ReleaseSpec) -> BuildRecord:
        """Build ``tag`` of the scanned application and publish its artifacts.

        Args:
            scanned: Manifest and its source directory.
            tag: Release tag to build.
            spec: Release recipe declared for ``tag``.

        Returns:
            BuildRecord: Published paths and SHA-512 digests of both artifacts.

        Raises:
            BuildError: If the build capability exits with a non-zero status.
            ArtifactError: If an artifact is missing, cannot be moved or hashed,
                or the banner cannot be copied.
        """

        manifest = scanned.manifest
        app_id = manifest.unique_id
        info(f"build: {app_id} tag: {tag}", use_emoji=self._use_emoji)
        paths = release_artifact_paths(app_id, tag)
        archive_target = publish_location(self._publish_root, paths.source_archive)
        bundle_target = publish_location(self._publish_root, paths.bundle)

        with tempfile.TemporaryDirectory(prefix=TEMP_BUILD_PREFIX, ignore_cleanup_errors=True) as tmp:
            output_dir = Path(tmp)
            request = BuildRequest(
                source=manifest.source,
                tag=tag,
                image=spec.image,
                command=spec.command,
                output_dir=output_dir,
            )
            returncode = self._capability.run(request)
            if returncode != 0:
                raise BuildError(app_id, tag, returncode)
            _relocate(output_dir / SOURCE_ARCHIVE_NAME, archive_target)
            _relocate(output_dir / BUNDLE_NAME, bundle_target)

        self._publish_banner(scanned)
        return BuildRecord(
            image=spec.image,
            command=spec.command,
            source_tarball=paths.source_archive,
            bundle=paths.bundle,
            archive_sha512=compute_file_checksum(archive_target),
            bundle_sha512=compute_file_checksum(bundle_target),
        )

    def _publish_banner(self, scanned: ScannedManifest) -> None:
        manifest = scanned.manifest
        if not manifest.banner:
            warn(f"{manifest.unique_id}: manifest declares no banner", use_emoji=self._use_emoji)
            return
        source = scanned.banner_source
        target = publish_location(self._publish_root, manifest.published_banner)
        info(f"copy banner: {source} -> {target}", use_emoji=self._use_emoji)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            raise ArtifactError(f"cannot copy banner {source}: {exc.strerror or exc}") from exc


def _relocate(source: Path, target: Path) -> None:
    if not source.is_file():
        raise ArtifactError(f"build did not produce {source.name}")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(source, target)
    except OSError as exc:
        raise ArtifactError(f"cannot move {source.name} to {target}: {exc.strerror or exc}") from exc


__all__ = ["ReleaseBuilder"]
