# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the container engine and other external programs."""

from __future__ import annotations

import shutil

# Bandit: programs are started from argument lists; ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path


class SubprocessExecutionError(RuntimeError):
    """Raised when a checked command exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        super().__init__(f"Command '{command[0]}' exited with status {returncode}")
        self.command = tuple(command)
        self.returncode = returncode


class ExecutableNotFoundError(FileNotFoundError):
    """Raised when the program to run cannot be located on ``PATH``."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable '{executable}' was not found on PATH")
        self.executable = executable


def resolve_command(args: Sequence[str]) -> tuple[str, ...]:
    """Return ``args`` with the program replaced by its absolute path.

    Raises:
        ValueError: If ``args`` is empty.
        ExecutableNotFoundError: If a bare program name is not on ``PATH``.
    """

    if not args:
        raise ValueError("a command needs at least the program to run")
    program, *rest = args
    if Path(program).is_absolute():
        return (program, *rest)
    located = shutil.which(program)
    if located is None:
        raise ExecutableNotFoundError(program)
    return (located, *rest)


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[bytes]:
    """Run ``args`` attached to the caller's standard streams.

    Builds can print a lot; their output goes straight to the terminal and is
    neither captured nor parsed.

    Args:
        args: Program and arguments.
        cwd: Working directory for the child.
        env: Complete environment for the child; inherited when ``None``.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.

    Returns:
        subprocess.CompletedProcess[bytes]: The finished process.

    Raises:
        ExecutableNotFoundError: If the program cannot be located.
        SubprocessExecutionError: If ``check`` is set and the command fails.
    """

    command = resolve_command(args)
    # Bandit: argument list without shell expansion.
    completed = subprocess.run(  # nosec B603
        command,
        cwd=cwd,
        env=dict(env) if env is not None else None,
        check=False,
    )
    if check and completed.returncode != 0:
        raise SubprocessExecutionError(command, completed.returncode)
    return completed


__all__ = ["ExecutableNotFoundError", "SubprocessExecutionError", "resolve_command", "run_command"]
