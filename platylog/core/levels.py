"""Severity flags and the bitmask checks that gate display and persistence."""

from __future__ import annotations

import enum
import re

from .errors import ConfigError


class Level(enum.IntFlag):
    NONE = 0
    TRACE = 1
    INFO = 1 << 1
    DEBUG = 1 << 2
    WARNING = 1 << 3
    ERROR = 1 << 4
    FATAL = 1 << 5
    ALL = 63


SEVERITIES = (Level.TRACE, Level.INFO, Level.DEBUG, Level.WARNING, Level.ERROR, Level.FATAL)

LEVEL_NAMES = {
    Level.TRACE: "Trace",
    Level.INFO: "Info",
    Level.DEBUG: "Debug",
    Level.WARNING: "Warning",
    Level.ERROR: "Error",
    Level.FATAL: "Fatal",
}

_SEPARATORS = re.compile(r"[,|\s]+")


def is_enabled(mask: int, level: int) -> bool:
    """Return True when ``level`` shares a bit with ``mask``."""
    return (int(mask) & int(level)) != 0


def level_name(level: int) -> str:
    return LEVEL_NAMES.get(Level(level), "Unknown")


def parse_levels(text: str | int) -> int:
    """Turn ``"info,warning"``, ``"all"``, ``"none"`` or an integer into a mask."""
    if isinstance(text, int):
        return text
    raw = (text or "").strip()
    if not raw:
        raise ConfigError("empty level mask")
    try:
        return int(raw, 0)
    except ValueError:
        pass

    mask = 0
    for token in _SEPARATORS.split(raw.upper()):
        if not token:
            continue
        try:
            mask |= Level[token]
        except KeyError:
            raise ConfigError(f"unknown log level: {token.lower()!r}") from None
    return mask
