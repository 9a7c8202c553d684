"""Route stdlib ``logging`` records into a platylog logger."""

from __future__ import annotations

import logging
import os

from .levels import Level
from .logger import Logger, get_logger

_INTERNAL = "platylog"


def level_for(levelno: int) -> Level:
    """Map a stdlib level number onto the closest platylog severity."""
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno >= logging.DEBUG:
        return Level.DEBUG
    return Level.TRACE


class PlatyHandler(logging.Handler):
    """Forwards records to ``target`` (the process-wide logger when omitted)."""

    def __init__(self, target: Logger | None = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._target = target

    @property
    def target(self) -> Logger:
        return self._target if self._target is not None else get_logger()

    def emit(self, record: logging.LogRecord) -> None:
        # platylog's own diagnostics are emitted while the target holds its lock
        if record.name == _INTERNAL or record.name.startswith(_INTERNAL + "."):
            return
        try:
            message = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.target.log(level_for(record.levelno), message)


def setup_logger(target: Logger | None = None, level: str = "INFO") -> PlatyHandler:
    """Send root logging through platylog, replacing any existing handlers."""
    handler = PlatyHandler(target)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(os.getenv("LOG_LEVEL", level).upper())
    root.addHandler(handler)
    return handler
