# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared rich consoles for status output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is an interactive terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsolePreset:
    """Presentation flags a console is built for."""

    color: bool
    emoji: bool
    tty: bool

    @property
    def styled(self) -> bool:
        """Return ``True`` when ANSI styling should be emitted."""

        return self.color and self.tty


class RichConsoleManager:
    """Hand out one :class:`Console` per :class:`ConsolePreset`.

    Consoles soft-wrap and do not bind a file; they follow whatever
    ``sys.stdout`` is at print time, next to the build engine output.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsolePreset, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color``/``emoji`` on the current stdout.

        Args:
            color: Whether colour output is wanted; ignored without a TTY.
            emoji: Whether rich should render emoji glyphs.

        Returns:
            Console: Cached console for the resulting preset.
        """

        preset = ConsolePreset(color=color, emoji=emoji, tty=detect_tty())
        console = self._consoles.get(preset)
        if console is None:
            console = Console(
                color_system="auto" if preset.styled else None,
                force_terminal=preset.tty,
                no_color=not preset.styled,
                emoji=preset.emoji,
                soft_wrap=True,
            )
            self._consoles[preset] = console
        return console


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["ConsolePreset", "RichConsoleManager", "detect_tty", "get_console_manager"]
