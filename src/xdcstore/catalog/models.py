# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Manifest and catalog models mirroring the published JSON documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from .paths import banner_path, normalize_publish_path, release_artifact_paths

_DESCRIPTIVE_FIELDS = ("name", "short_description", "description", "source", "banner")


def _null_to_empty_text(value: Any) -> Any:
    return "" if value is None else value


def _null_to_empty_collection(value: Any, info: ValidationInfo) -> Any:
    # Documents written by older generators carry ``null`` for never-built apps.
    if value is None:
        return {} if info.field_name == "releases" else []
    return value


class ReleaseSpec(BaseModel):
    """Build recipe declared by a manifest for one release tag."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    image: str = ""
    command: str = ""

    @field_validator("image", "command", mode="before")
    @classmethod
    def _coerce_null(cls, value: Any) -> Any:
        return _null_to_empty_text(value)


class ApplicationManifest(BaseModel):
    """Per-application input document discovered under the apps tree.

    ``banner`` is relative to the directory holding the manifest file.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = ""
    unique_id: str = Field(alias="uniqueId", min_length=1)
    short_description: str = Field(default="", alias="shortDescription")
    description: str = ""
    source: str = ""
    banner: str = ""
    supported_releases: list[str] = Field(default_factory=list, alias="supportedReleases")
    releases: dict[str, ReleaseSpec] = Field(default_factory=dict)

    @field_validator(*_DESCRIPTIVE_FIELDS, mode="before")
    @classmethod
    def _coerce_null_text(cls, value: Any) -> Any:
        return _null_to_empty_text(value)

    @field_validator("supported_releases", "releases", mode="before")
    @classmethod
    def _coerce_null_collection(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_to_empty_collection(value, info)

    @model_validator(mode="after")
    def _check_publish_paths(self) -> ApplicationManifest:
        banner_path(self.unique_id, self.banner)
        for tag in self.releases:
            release_artifact_paths(self.unique_id, tag)
        return self

    @property
    def published_banner(self) -> str:
        """Return the banner location inside the publish tree."""

        return banner_path(self.unique_id, self.banner)


class BuildRecord(BaseModel):
    """Immutable proof that one (application, release tag) pair was built.

    Paths are relative to the publish root; digests are SHA-512 hex strings.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    image: str
    command: str
    source_tarball: str = Field(alias="sourceTarball")
    bundle: str = Field(alias="WebXDCDownload")
    bundle_sha512: str = Field(alias="xdcsha512sum")
    archive_sha512: str = Field(alias="tarsha512sum")

    @field_validator("source_tarball", "bundle")
    @classmethod
    def _inside_publish_tree(cls, value: str) -> str:
        return normalize_publish_path(value)


class CatalogEntry(BaseModel):
    """Catalog view of one application: latest manifest metadata plus build records."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore", populate_by_name=True)

    name: str = ""
    unique_id: str = Field(alias="uniqueId")
    short_description: str = Field(default="", alias="shortDescription")
    description: str = ""
    source: str = ""
    banner: str = ""
    supported_releases: list[str] = Field(default_factory=list, alias="supportedReleases")
    releases: dict[str, BuildRecord] = Field(default_factory=dict)

    @field_validator(*_DESCRIPTIVE_FIELDS, mode="before")
    @classmethod
    def _coerce_null_text(cls, value: Any) -> Any:
        return _null_to_empty_text(value)

    @field_validator("supported_releases", "releases", mode="before")
    @classmethod
    def _coerce_null_collection(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_to_empty_collection(value, info)

    @classmethod
    def from_manifest(cls, manifest: ApplicationManifest) -> CatalogEntry:
        """Return a fresh entry holding ``manifest``'s metadata and no build records."""

        entry = cls(unique_id=manifest.unique_id)
        entry.update_from(manifest)
        return entry

    def update_from(self, manifest: ApplicationManifest) -> None:
        """Overwrite every descriptive field from ``manifest``; ``releases`` is untouched."""

        self.name = manifest.name
        self.unique_id = manifest.unique_id
        self.short_description = manifest.short_description
        self.description = manifest.description
        self.source = manifest.source
        self.banner = manifest.published_banner
        self.supported_releases = list(manifest.supported_releases)


class Catalog(BaseModel):
    """Root persisted document keyed by application identity."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    apps: dict[str, CatalogEntry] = Field(default_factory=dict)

    @field_validator("apps", mode="before")
    @classmethod
    def _coerce_null_apps(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON payload with application and release keys sorted."""

        apps: dict[str, Any] = {}
        for app_id in sorted(self.apps):
            entry = self.apps[app_id].model_dump(mode="json", by_alias=True)
            entry["releases"] = {tag: entry["releases"][tag] for tag in sorted(entry["releases"])}
            apps[app_id] = entry
        return {"apps": apps}


__all__ = [
    "ApplicationManifest",
    "BuildRecord",
    "Catalog",
    "CatalogEntry",
    "ReleaseSpec",
]
