"""Console output with optional ANSI colors."""

from __future__ import annotations

import enum
import sys
from typing import Protocol, TextIO

from colorama import Fore, Style, just_fix_windows_console

from .levels import Level


class Color(enum.Enum):
    """Semantic console colors, independent of the terminal backend."""

    WHITE = "white"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BRIGHT_RED = "bright_red"


LEVEL_COLORS = {
    Level.TRACE: Color.WHITE,
    Level.INFO: Color.BLUE,
    Level.DEBUG: Color.GREEN,
    Level.WARNING: Color.YELLOW,
    Level.ERROR: Color.RED,
    Level.FATAL: Color.BRIGHT_RED,
}

ANSI_CODES = {
    Color.WHITE: Fore.WHITE,
    Color.BLUE: Fore.BLUE,
    Color.GREEN: Fore.GREEN,
    Color.YELLOW: Fore.YELLOW,
    Color.RED: Fore.RED,
    Color.BRIGHT_RED: Fore.RED + Style.BRIGHT,
}


def color_for(level: int) -> Color:
    return LEVEL_COLORS.get(Level(level), Color.WHITE)


class ConsoleWriter(Protocol):
    """Anything that can print one line of text in a semantic color."""

    def write_colored(self, text: str, color: Color) -> None:
        ...


class PlainConsoleWriter:
    """Writes lines to stdout and ignores the requested color."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved on every write, sys.stdout may be swapped after construction
        return self._stream if self._stream is not None else sys.stdout

    def write_colored(self, text: str, color: Color) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()


class AnsiConsoleWriter(PlainConsoleWriter):
    """Wraps each line in colorama escape codes and resets afterwards."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__(stream)
        just_fix_windows_console()

    def write_colored(self, text: str, color: Color) -> None:
        self.stream.write(f"{ANSI_CODES[color]}{text}{Style.RESET_ALL}\n")
        self.stream.flush()


def make_console(color: bool = True, stream: TextIO | None = None) -> ConsoleWriter:
    """Return an ANSI writer when ``color`` is on, a plain one otherwise."""
    if color:
        return AnsiConsoleWriter(stream)
    return PlainConsoleWriter(stream)
