# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Persisted catalog store with merge-on-rescan semantics."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from ..errors import CatalogError
from .io import dump_catalog, load_catalog
from .models import ApplicationManifest, BuildRecord, Catalog, CatalogEntry

LOGGER = logging.getLogger(__name__)

CATALOG_FILE_MODE: Final[int] = 0o644


class CatalogStore:
    """Own the in-memory catalog and its single on-disk document.

    The store is the only mutable state shared by the generation pipeline.
    ``save`` holds a lock while serializing and replacing the document, so a
    reader of the file sees either the previous or the new version in full.
    """

    def __init__(self, path: Path) -> None:
        """Bind the store to the catalog document at ``path``.

        Args:
            path: Location of the persisted catalog document.
        """

        self._path = path
        self._catalog = Catalog()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Return the catalog document location."""

        return self._path

    @property
    def catalog(self) -> Catalog:
        """Return the live catalog model."""

        return self._catalog

    def load(self) -> Catalog:
        """Load the persisted catalog, starting empty when no document exists.

        Returns:
            Catalog: The catalog now held by the store.

        Raises:
            CatalogError: If an existing document cannot be parsed.
        """

        loaded = load_catalog(self._path)
        if loaded is None:
            LOGGER.debug("no catalog at %s, starting empty", self._path)
            loaded = Catalog()
        self._catalog = loaded
        return loaded

    def merge(self, manifest: ApplicationManifest) -> CatalogEntry:
        """Upsert the entry for ``manifest.unique_id``.

        Descriptive fields always take the manifest's values; existing build
        records are kept as they are.

        Args:
            manifest: Freshly scanned manifest.

        Returns:
            CatalogEntry: The created or updated entry.
        """

        entry = self._catalog.apps.get(manifest.unique_id)
        if entry is None:
            entry = CatalogEntry.from_manifest(manifest)
            self._catalog.apps[manifest.unique_id] = entry
        else:
            entry.update_from(manifest)
        return entry

    def get(self, app_id: str) -> CatalogEntry | None:
        """Return the entry for ``app_id`` if one exists."""

        return self._catalog.apps.get(app_id)

    def has_build(self, app_id: str, tag: str) -> bool:
        """Return ``True`` when a build record exists for ``app_id`` at ``tag``."""

        entry = self._catalog.apps.get(app_id)
        return entry is not None and tag in entry.releases

    def record_build(self, app_id: str, tag: str, record: BuildRecord) -> None:
        """Insert the build record for ``app_id`` at ``tag``.

        Raises:
            CatalogError: If the application is unknown or the tag already has
                a record; build records are written once and never replaced.
        """

        entry = self._catalog.apps.get(app_id)
        if entry is None:
            raise CatalogError(f"cannot record build for unknown application '{app_id}'")
        if tag in entry.releases:
            raise CatalogError(f"build record for {app_id} tag {tag} already exists")
        entry.releases[tag] = record

    def entries(self) -> tuple[CatalogEntry, ...]:
        """Return catalog entries ordered by application identity."""

        return tuple(self._catalog.apps[app_id] for app_id in sorted(self._catalog.apps))

    def save(self) -> None:
        """Atomically replace the persisted document with the current catalog.

        Raises:
            CatalogError: If the document cannot be written.
        """

        with self._lock:
            document = dump_catalog(self._catalog)
            try:
                fd, temp_name = tempfile.mkstemp(
                    dir=self._path.parent,
                    prefix=f".{self._path.name}.",
                    suffix=".tmp",
                )
            except OSError as exc:
                raise CatalogError(f"{self._path}: cannot write catalog: {exc}") from exc
            temp_path = Path(temp_name)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(document)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.chmod(temp_path, CATALOG_FILE_MODE)
                os.replace(temp_path, self._path)
            except OSError as exc:
                temp_path.unlink(missing_ok=True)
                raise CatalogError(f"{self._path}: cannot write catalog: {exc}") from exc
            LOGGER.debug("saved catalog path=%s apps=%d", self._path, len(self._catalog.apps))

    def __contains__(self, app_id: object) -> bool:
        return app_id in self._catalog.apps

    def __len__(self) -> int:
        return len(self._catalog.apps)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries())


__all__ = ["CATALOG_FILE_MODE", "CatalogStore"]
