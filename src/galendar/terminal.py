"""Write rendered lines to a terminal, colored by style."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from galendar.config import color_mode
from galendar.models import RenderedLine, Segment, Style

RESET = "\033[0m"

# ANSI SGR foreground codes
COLORS = {
    Style.AFFIRMATIVE: "\033[32m",
    Style.ALERT: "\033[31m",
    Style.CAUTION: "\033[33m",
}


def _wants_color(stream: TextIO) -> bool:
    mode = color_mode()
    if mode != "auto":
        return mode == "always"
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class TerminalWriter:
    """Terminal output for rendered lines.

    Usage:
        writer = TerminalWriter()
        writer.write_lines(render(calendar_id, events, now))
    """

    def __init__(self, stream: TextIO | None = None, color: bool | None = None) -> None:
        """Initialize the writer.

        Args:
            stream: Output stream. Defaults to stdout.
            color: Force color on or off. Defaults to GALENDAR_COLOR, then
                whether the stream is a TTY and NO_COLOR is unset.
        """
        self.stream = stream or sys.stdout
        self.color = _wants_color(self.stream) if color is None else color

    def paint(self, segment: Segment) -> str:
        code = COLORS.get(segment.style)
        if not self.color or code is None:
            return segment.text
        return f"{code}{segment.text}{RESET}"

    def format_line(self, line: RenderedLine) -> str:
        return "".join(self.paint(segment) for segment in line.segments)

    def write_line(self, line: RenderedLine) -> None:
        self.stream.write(self.format_line(line) + "\n")

    def write_lines(self, lines: list[RenderedLine]) -> None:
        for line in lines:
            self.write_line(line)

    def write_notice(self, text: str, style: Style = Style.CAUTION) -> None:
        """Write a single styled message line."""
        self.write_line(RenderedLine.plain(text, style))

    def blank(self) -> None:
        self.stream.write("\n")
