# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Sandboxed build capability driven through a container engine."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Protocol

from ..constants import (
    CONTAINER_BUILD_DIR,
    CONTAINER_OUTPUT_DIR,
    CONTAINER_SHELL,
    DEFAULT_CONTAINER_ENGINE,
    SOURCE_ARCHIVE_NAME,
)
from ..logging import fail, info
from ..process_utils import run_command

CommandRunner = Callable[[Sequence[str], Path | None], Any]

# Exit status reported when the engine executable cannot be found.
COMMAND_NOT_FOUND: Final[int] = 127
# Exit status reported when the engine exists but cannot be started.
COMMAND_NOT_EXECUTABLE: Final[int] = 126


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Inputs for one release build.

    The capability must leave ``source.tar.gz`` and ``app.xdc`` in
    ``output_dir`` when it succeeds.
    """

    source: str
    tag: str
    image: str
    command: str
    output_dir: Path


class BuildCapability(Protocol):
    """Run a release build and report its exit status."""

    def run(self, request: BuildRequest) -> int: ...


def build_script(request: BuildRequest) -> str:
    """Return the shell script executed inside the build container.

    Args:
        request: Build inputs; the release command is passed through verbatim.

    Returns:
        str: Script cloning the source, archiving it and running the release command.
    """

    archive = f"{CONTAINER_OUTPUT_DIR}/{SOURCE_ARCHIVE_NAME}"
    return (
        f"git clone {shlex.quote(request.source)} {CONTAINER_BUILD_DIR}"
        f" && cd {CONTAINER_BUILD_DIR}"
        f" && git checkout {shlex.quote(request.tag)}"
        f" && tar --exclude-vcs -zcvf {archive} ."
        f" && {request.command}"
    )


class ContainerBuildCapability:
    """Run builds in a throwaway container with the output directory mounted at ``/out``."""

    def __init__(
        self,
        *,
        engine: str = DEFAULT_CONTAINER_ENGINE,
        runner: CommandRunner | None = None,
        use_emoji: bool = True,
    ) -> None:
        self._engine = engine
        self._runner = runner or _default_runner
        self._use_emoji = use_emoji

    def command_for(self, request: BuildRequest) -> tuple[str, ...]:
        """Return the engine invocation for ``request``."""

        return (
            self._engine,
            "run",
            "--rm",
            "-i",
            "-v",
            f"{request.output_dir}:{CONTAINER_OUTPUT_DIR}",
            request.image,
            CONTAINER_SHELL,
            "-c",
            build_script(request),
        )

    def run(self, request: BuildRequest) -> int:
        """Execute the build and return the engine's exit status."""

        args = self.command_for(request)
        info(f"run: {shlex.join(args)}", use_emoji=self._use_emoji)
        try:
            completed = self._runner(args, None)
        except FileNotFoundError as exc:
            fail(str(exc), use_emoji=self._use_emoji)
            return COMMAND_NOT_FOUND
        except OSError as exc:
            fail(f"cannot start {self._engine}: {exc.strerror or exc}", use_emoji=self._use_emoji)
            return COMMAND_NOT_EXECUTABLE
        return int(completed.returncode)


def _default_runner(args: Sequence[str], cwd: Path | None) -> Any:
    return run_command(args, cwd=cwd, check=False)


__all__ = [
    "COMMAND_NOT_EXECUTABLE",
    "COMMAND_NOT_FOUND",
    "BuildCapability",
    "BuildRequest",
    "CommandRunner",
    "ContainerBuildCapability",
    "build_script",
]
