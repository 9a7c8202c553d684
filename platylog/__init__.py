"""Leveled, colorized console logging with rotating log files."""

from .core.errors import ArchiveError, ConfigError, PlatyLogError
from .core.levels import Level
from .core.logger import (
    Logger,
    configure,
    debug,
    error,
    fatal,
    get_logger,
    info,
    reset_logger,
    trace,
    warning,
)
from .core.settings import LoggerSettings

__all__ = [
    "ArchiveError",
    "ConfigError",
    "Level",
    "Logger",
    "LoggerSettings",
    "PlatyLogError",
    "configure",
    "debug",
    "error",
    "fatal",
    "get_logger",
    "info",
    "reset_logger",
    "trace",
    "warning",
]
