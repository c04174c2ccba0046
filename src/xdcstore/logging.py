# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status lines printed while the catalog is generated.

Every helper writes one line through the shared rich console. Emoji prefixes
and colour are optional; without a TTY the text is printed plain so that it
reads well in CI logs next to the container engine output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager


@dataclass(frozen=True, slots=True)
class StatusStyle:
    """Prefix glyph and rich style for one kind of status line."""

    glyph: str
    style: str


INFO: Final[StatusStyle] = StatusStyle(glyph="ℹ️ ", style="cyan")
OK: Final[StatusStyle] = StatusStyle(glyph="✅ ", style="green")
WARN: Final[StatusStyle] = StatusStyle(glyph="⚠️ ", style="yellow")
FAIL: Final[StatusStyle] = StatusStyle(glyph="❌ ", style="red")


def render_status(msg: str, status: StatusStyle, *, use_emoji: bool, use_color: bool) -> Text:
    """Return the rich text for ``msg`` decorated according to ``status``.

    Args:
        msg: Message body.
        status: Glyph and style of the line.
        use_emoji: Prefix the glyph when ``True``.
        use_color: Apply the style when ``True``.

    Returns:
        Text: Renderable line.
    """

    text = Text(f"{status.glyph}{msg}" if use_emoji else msg)
    if use_color:
        text.stylize(status.style)
    return text


def _emit(msg: str, status: StatusStyle, *, use_emoji: bool, use_color: bool | None) -> None:
    color = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color, emoji=use_emoji)
    console.print(render_status(msg, status, use_emoji=use_emoji, use_color=color))


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating groups of status lines."""

    console = get_console_manager().get(color=use_color, emoji=False)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a progress line, such as the build command about to run."""

    _emit(msg, INFO, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a completion line."""

    _emit(msg, OK, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a non-fatal problem."""

    _emit(msg, WARN, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a fatal error."""

    _emit(msg, FAIL, use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "FAIL",
    "INFO",
    "OK",
    "WARN",
    "StatusStyle",
    "fail",
    "info",
    "ok",
    "render_status",
    "section",
    "warn",
]
