# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Scan, merge and build orchestration for the application catalog."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .build.builder import ReleaseBuilder
from .build.capability import BuildCapability, ContainerBuildCapability
from .catalog.resolution import MissingArtifact, find_missing_artifacts, resolve_releases
from .catalog.scanner import ManifestScanner, ScannedManifest
from .catalog.store import CatalogStore
from .config import XdcStoreConfig
from .errors import ConfigurationError, ScanTraversalError
from .logging import info, ok, warn

ReleaseKey = tuple[str, str]


@dataclass(slots=True)
class GenerationResult:
    """Capture what a generation run merged, built and skipped."""

    merged: list[str] = field(default_factory=list)
    built: list[ReleaseKey] = field(default_factory=list)
    skipped: list[ReleaseKey] = field(default_factory=list)
    planned: list[ReleaseKey] = field(default_factory=list)
    missing_artifacts: list[MissingArtifact] = field(default_factory=list)
    traversal_error: ScanTraversalError | None = None

    @property
    def complete(self) -> bool:
        """Return ``True`` when the whole manifest tree was traversed."""

        return self.traversal_error is None


class CatalogGenerator:
    """Merge scanned manifests into the store and build every missing release.

    The store is saved after each metadata merge and after each recorded
    build, so an interrupted run loses at most the build in flight.
    """

    def __init__(
        self,
        store: CatalogStore,
        builder: ReleaseBuilder | None,
        *,
        publish_root: Path,
        verify_artifacts: bool = False,
        dry_run: bool = False,
        use_emoji: bool = True,
    ) -> None:
        """Create a generator operating on ``store``.

        Args:
            store: Loaded catalog store.
            builder: Release builder; may be ``None`` only for dry runs.
            publish_root: Root of the publish tree, used for artifact checks.
            verify_artifacts: Warn about build records whose files are gone.
            dry_run: Report pending builds without building or saving.
            use_emoji: Whether status output should include emoji glyphs.
        """

        if builder is None and not dry_run:
            raise ValueError("a release builder is required unless dry_run is set")
        self._store = store
        self._builder = builder
        self._publish_root = publish_root
        self._verify_artifacts = verify_artifacts
        self._dry_run = dry_run
        self._use_emoji = use_emoji

    def run(self, manifests: Iterable[ScannedManifest]) -> GenerationResult:
        """Process ``manifests`` in order.

        A traversal error ends the walk but not the run: the error is logged
        and recorded on the result alongside the work already done. Every
        other error propagates.

        Args:
            manifests: Scanned manifests, typically a :class:`ManifestScanner`.

        Returns:
            GenerationResult: Summary of merges, builds and skips.
        """

        result = GenerationResult()
        try:
            for scanned in manifests:
                self._process(scanned, result)
        except ScanTraversalError as exc:
            warn(str(exc), use_emoji=self._use_emoji)
            result.traversal_error = exc
        return result

    def _process(self, scanned: ScannedManifest, result: GenerationResult) -> None:
        manifest = scanned.manifest
        app_id = manifest.unique_id
        info(f"{scanned.directory} {scanned.path.name}", use_emoji=self._use_emoji)

        entry = self._store.merge(manifest)
        result.merged.append(app_id)
        if not self._dry_run:
            self._store.save()

        if self._verify_artifacts:
            for missing in find_missing_artifacts(entry, self._publish_root):
                warn(
                    f"{missing.app_id} tag {missing.tag}: published file {missing.path} is missing",
                    use_emoji=self._use_emoji,
                )
                result.missing_artifacts.append(missing)

        plan = resolve_releases(entry, manifest)
        for tag in plan.skipped:
            info(f"repo contains build of {app_id} tag: {tag}", use_emoji=self._use_emoji)
            result.skipped.append((app_id, tag))

        for tag in plan.pending:
            if self._dry_run or self._builder is None:
                info(f"DRY RUN: would build {app_id} tag: {tag}", use_emoji=self._use_emoji)
                result.planned.append((app_id, tag))
                continue
            record = self._builder.build(scanned, tag, manifest.releases[tag])
            self._store.record_build(app_id, tag, record)
            self._store.save()
            ok(f"built {app_id} tag: {tag}", use_emoji=self._use_emoji)
            result.built.append((app_id, tag))


def ensure_directories(config: XdcStoreConfig) -> None:
    """Fail before any side effect when the input or output directory is missing.

    Raises:
        ConfigurationError: If ``apps_dir`` or ``build_dir`` is not a directory.
    """

    for label, directory in (("apps", config.apps_dir), ("build", config.build_dir)):
        if not directory.is_dir():
            raise ConfigurationError(
                f"'{label}' directory {directory} is not available, are you in the correct repository?",
            )


def generate(
    config: XdcStoreConfig,
    *,
    capability: BuildCapability | None = None,
    dry_run: bool = False,
    use_emoji: bool = True,
) -> GenerationResult:
    """Run a full generation pass described by ``config``.

    Args:
        config: Resolved configuration with absolute directories.
        capability: Build capability; defaults to a container engine runner.
        dry_run: Report pending builds without building or saving.
        use_emoji: Whether status output should include emoji glyphs.

    Returns:
        GenerationResult: Summary of the run.

    Raises:
        ConfigurationError: If the configured directories are missing.
        XdcStoreError: For any fatal manifest, catalog, build or artifact error.
    """

    ensure_directories(config)
    store = CatalogStore(config.catalog_path)
    store.load()
    builder: ReleaseBuilder | None = None
    if not dry_run:
        if capability is None:
            capability = ContainerBuildCapability(engine=config.container_engine, use_emoji=use_emoji)
        builder = ReleaseBuilder(config.build_dir, capability, use_emoji=use_emoji)
    generator = CatalogGenerator(
        store,
        builder,
        publish_root=config.build_dir,
        verify_artifacts=config.verify_artifacts,
        dry_run=dry_run,
        use_emoji=use_emoji,
    )
    return generator.run(ManifestScanner(config.apps_dir, suffix=config.manifest_suffix))


__all__ = [
    "CatalogGenerator",
    "GenerationResult",
    "ReleaseKey",
    "ensure_directories",
    "generate",
]
