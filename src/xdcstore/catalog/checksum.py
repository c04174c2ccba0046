# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for published artifacts."""

from __future__ import annotations

import hashlib
from pathlib import Path

from ..constants import CHECKSUM_ALGORITHM, CHECKSUM_CHUNK_SIZE
from ..errors import ArtifactError


def compute_file_checksum(path: Path, *, algorithm: str = CHECKSUM_ALGORITHM) -> str:
    """Stream ``path`` through ``algorithm`` and return the hex digest.

    Args:
        path: Artifact to hash.
        algorithm: Name of a :mod:`hashlib` algorithm.

    Returns:
        str: Lowercase hex-encoded digest of the file contents.

    Raises:
        ArtifactError: If the file cannot be opened or read.
    """

    hasher = hashlib.new(algorithm)
    try:
        with path.open("rb") as stream:
            for chunk in iter(lambda: stream.read(CHECKSUM_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as exc:
        raise ArtifactError(f"{path}: cannot hash artifact: {exc.strerror or exc}") from exc
    return hasher.hexdigest()


__all__ = ["compute_file_checksum"]
