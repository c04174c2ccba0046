# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from xdcstore.build.capability import BuildRequest
from xdcstore.config import XdcStoreConfig
from xdcstore.constants import BUNDLE_NAME, SOURCE_ARCHIVE_NAME

ManifestWriter = Callable[..., Path]


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Return a repository root holding empty ``apps`` and ``build`` directories."""

    (tmp_path / "apps").mkdir()
    (tmp_path / "build").mkdir()
    return tmp_path


@pytest.fixture
def config(repo: Path) -> XdcStoreConfig:
    """Return a configuration resolved against ``repo``."""

    return XdcStoreConfig().resolved(repo)


@pytest.fixture
def write_manifest(repo: Path) -> ManifestWriter:
    """Return a helper writing a manifest (and its banner) under ``repo/apps``."""

    def _write(
        relative: str,
        app_id: str,
        *,
        releases: dict[str, dict[str, str]] | None = None,
        banner: str = "icon.png",
        **fields: Any,
    ) -> Path:
        path = repo / "apps" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        document: dict[str, Any] = {
            "name": fields.pop("name", app_id.title()),
            "uniqueId": app_id,
            "shortDescription": fields.pop("shortDescription", f"{app_id} short"),
            "description": fields.pop("description", f"{app_id} long description"),
            "source": fields.pop("source", f"https://example.org/{app_id}.git"),
            "banner": banner,
            "supportedReleases": sorted(releases or {}),
            "releases": releases or {},
        }
        document.update(fields)
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        if banner:
            banner_file = path.parent / banner
            banner_file.parent.mkdir(parents=True, exist_ok=True)
            banner_file.write_bytes(b"\x89PNG banner for " + app_id.encode())
        return path

    return _write


@dataclass
class StubCapability:
    """Build capability that records requests and fakes the container outputs."""

    returncode: int = 0
    failing_tags: tuple[str, ...] = ()
    produce: tuple[str, ...] = (SOURCE_ARCHIVE_NAME, BUNDLE_NAME)
    requests: list[BuildRequest] = field(default_factory=list)

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(request.source, request.tag) for request in self.requests]

    @property
    def tags(self) -> list[str]:
        return [request.tag for request in self.requests]

    def run(self, request: BuildRequest) -> int:
        self.requests.append(request)
        if request.tag in self.failing_tags:
            return 1
        if self.returncode != 0:
            return self.returncode
        for name in self.produce:
            payload = f"{name}:{request.source}:{request.tag}".encode()
            (request.output_dir / name).write_bytes(payload)
        return 0


@pytest.fixture
def stub_capability() -> type[StubCapability]:
    """Return the stub capability class; call it to get a fresh recorder."""

    return StubCapability


@pytest.fixture
def release() -> Callable[..., dict[str, str]]:
    """Return a helper building a manifest release recipe payload."""

    def _release(image: str = "node:20", command: str = "npm ci && npm run build") -> dict[str, str]:
        return {"image": image, "command": command}

    return _release


@pytest.fixture
def block_directory(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], None]:
    """Return a helper making ``os.scandir`` fail with ``PermissionError`` for one directory."""

    real_scandir = os.scandir

    def _block(blocked: Path) -> None:
        def _scandir(target=".", *args, **kwargs):
            if isinstance(target, (str, os.PathLike)) and Path(target) == blocked:
                raise PermissionError(13, "Permission denied", str(target))
            return real_scandir(target, *args, **kwargs)

        monkeypatch.setattr(os, "scandir", _scandir)

    return _block
