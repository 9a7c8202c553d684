"""Core functionality for platylog."""

from . import console, errors, flags, formatting, levels, logger, logging, rotation, settings, util

__all__ = [
    "console",
    "errors",
    "flags",
    "formatting",
    "levels",
    "logger",
    "logging",
    "rotation",
    "settings",
    "util",
]
