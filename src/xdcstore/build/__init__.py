# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Release build capability and artifact publishing."""

from __future__ import annotations

from .builder import ReleaseBuilder
from .capability import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    BuildCapability,
    BuildRequest,
    CommandRunner,
    ContainerBuildCapability,
    build_script,
)

__all__ = [
    "COMMAND_NOT_EXECUTABLE",
    "COMMAND_NOT_FOUND",
    "BuildCapability",
    "BuildRequest",
    "CommandRunner",
    "ContainerBuildCapability",
    "ReleaseBuilder",
    "build_script",
]
