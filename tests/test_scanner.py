# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for manifest discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from xdcstore.catalog.scanner import ManifestScanner
from xdcstore.errors import ManifestError, ScanTraversalError


def test_scanner_yields_only_suffixed_files_in_lexical_order(repo: Path, write_manifest) -> None:
    write_manifest("zeta.json", "zeta")
    write_manifest("alpha/alpha.json", "alpha")
    write_manifest("beta.json", "beta")
    (repo / "apps" / "README.md").write_text("not a manifest\n", encoding="utf-8")
    (repo / "apps" / "notes.json.bak").write_text("{}", encoding="utf-8")

    scanner = ManifestScanner(repo / "apps")
    found = [item.manifest.unique_id for item in scanner]

    assert found == ["alpha", "beta", "zeta"]


def test_scanner_descends_nested_directories(repo: Path, write_manifest) -> None:
    path = write_manifest("group/sub/deep/app.json", "deep")

    [scanned] = list(ManifestScanner(repo / "apps"))

    assert scanned.path == path
    assert scanned.directory == path.parent
    assert scanned.manifest.unique_id == "deep"


def test_scanner_is_restartable(repo: Path, write_manifest) -> None:
    write_manifest("one.json", "one")
    scanner = ManifestScanner(repo / "apps")

    first = [item.manifest.unique_id for item in scanner]
    write_manifest("two.json", "two")
    second = [item.manifest.unique_id for item in scanner]

    assert first == ["one"]
    assert second == ["one", "two"]


def test_scanner_honours_custom_suffix(repo: Path, write_manifest) -> None:
    write_manifest("one.json", "one")
    write_manifest("two.app.json", "two")

    found = [item.manifest.unique_id for item in ManifestScanner(repo / "apps", suffix=".app.json")]

    assert found == ["two"]


def test_scanner_does_not_follow_directory_symlinks(repo: Path, write_manifest, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "hidden.json").write_text('{"uniqueId": "hidden"}', encoding="utf-8")
    (repo / "apps" / "link").symlink_to(outside, target_is_directory=True)
    write_manifest("real.json", "real")

    found = [item.manifest.unique_id for item in ManifestScanner(repo / "apps")]

    assert found == ["real"]


def test_malformed_manifest_is_fatal(repo: Path, write_manifest) -> None:
    write_manifest("good.json", "good")
    broken = repo / "apps" / "zz-broken.json"
    broken.write_text("{not json", encoding="utf-8")

    iterator = iter(ManifestScanner(repo / "apps"))
    assert next(iterator).manifest.unique_id == "good"
    with pytest.raises(ManifestError) as excinfo:
        next(iterator)

    assert excinfo.value.path == broken
    assert "failed to parse manifest JSON" in str(excinfo.value)


def test_manifest_without_identity_is_fatal(repo: Path) -> None:
    (repo / "apps" / "anon.json").write_text('{"name": "anonymous"}', encoding="utf-8")

    with pytest.raises(ManifestError, match="uniqueId"):
        list(ManifestScanner(repo / "apps"))


def test_manifest_that_is_not_an_object_is_fatal(repo: Path) -> None:
    (repo / "apps" / "list.json").write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ManifestError, match="expected a JSON object"):
        list(ManifestScanner(repo / "apps"))


def test_manifest_with_banner_outside_publish_tree_is_fatal(repo: Path) -> None:
    manifest = repo / "apps" / "climb.json"
    manifest.write_text('{"uniqueId": "climb", "banner": "../../../etc/passwd"}', encoding="utf-8")

    with pytest.raises(ManifestError, match="escapes the publish tree") as excinfo:
        list(ManifestScanner(repo / "apps"))

    assert excinfo.value.path == manifest


def test_traversal_error_surfaces_after_earlier_manifests(
    repo: Path,
    write_manifest,
    block_directory,
) -> None:
    write_manifest("a.json", "a")
    write_manifest("b/b.json", "b")
    write_manifest("c.json", "c")
    block_directory(repo / "apps" / "b")

    seen: list[str] = []
    with pytest.raises(ScanTraversalError) as excinfo:
        for item in ManifestScanner(repo / "apps"):
            seen.append(item.manifest.unique_id)

    assert seen == ["a"]
    assert excinfo.value.directory == repo / "apps" / "b"
