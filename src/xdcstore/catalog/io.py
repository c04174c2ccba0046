# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading manifest and catalog JSON documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import CatalogError, ManifestError
from .models import ApplicationManifest, Catalog


def load_manifest(path: Path) -> ApplicationManifest:
    """Load and validate the application manifest stored at ``path``.

    Args:
        path: Manifest file discovered by the scanner.

    Returns:
        ApplicationManifest: Parsed manifest.

    Raises:
        ManifestError: If the file cannot be read, is not valid JSON, or does
            not describe an application.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(path, f"cannot read manifest: {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"failed to parse manifest JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ManifestError(path, "expected a JSON object")
    try:
        return ApplicationManifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(path, _summarise(exc)) from exc


def load_catalog(path: Path) -> Catalog | None:
    """Return the catalog persisted at ``path`` or ``None`` when absent.

    Raises:
        CatalogError: If the document exists but cannot be read or parsed, or
            an application is filed under a key other than its ``uniqueId``.
    """

    if not path.exists():
        return None
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CatalogError(f"{path}: failed to load catalog: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise CatalogError(f"{path}: expected a JSON object")
    try:
        catalog = Catalog.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"{path}: {_summarise(exc)}") from exc
    for key, entry in catalog.apps.items():
        if key != entry.unique_id:
            raise CatalogError(f"{path}: entry '{key}' has uniqueId '{entry.unique_id}'")
    return catalog


def dump_catalog(catalog: Catalog) -> str:
    """Return the serialized catalog document."""

    return json.dumps(catalog.to_payload(), indent=4, ensure_ascii=False) + "\n"


def _summarise(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"invalid field '{location}': {first['msg']}"


__all__ = ["dump_catalog", "load_catalog", "load_manifest"]
