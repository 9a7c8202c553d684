"""Leveled console and file logging behind a single lock."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from .console import Color, ConsoleWriter, color_for, make_console
from .errors import ConfigError, PlatyLogError
from .formatting import LogRecord, build_record
from .levels import Level, is_enabled
from .rotation import DEFAULT_MAX_ARCHIVES, LogRotator, file_creation_time
from .settings import LoggerSettings

LOGGER = logging.getLogger(__name__)


class Logger:
    """Filters, formats and emits records to the console and the active log.

    Each instance is one logging session: its first saved record rolls the
    previous ``latest_log.txt`` into the archive directory. Nothing raised by
    the console or the filesystem reaches the caller; a failing log file turns
    saving off for the rest of the session.
    """

    def __init__(
        self,
        log_dir: Path | str = "logs",
        *,
        display_levels: int = Level.ALL,
        save_levels: int = Level.ALL,
        max_archives: int = DEFAULT_MAX_ARCHIVES,
        console: ConsoleWriter | None = None,
        color: bool = True,
        clock: Callable[[], datetime] = datetime.now,
        creation_time: Callable[[Path], float] = file_creation_time,
    ) -> None:
        self._console = console if console is not None else make_console(color)
        self._display_levels = int(display_levels)
        self._save_levels = int(save_levels)
        self._clock = clock
        self._lock = threading.Lock()
        self._save_failure: str | None = None
        self.rotator = LogRotator(
            log_dir, max_archives, console=self._console, creation_time=creation_time
        )

    @classmethod
    def from_settings(cls, settings: LoggerSettings, **overrides: Any) -> Logger:
        options: dict[str, Any] = {
            "display_levels": settings.display_levels,
            "save_levels": settings.save_levels,
            "max_archives": settings.max_archives,
            "color": settings.color,
        }
        options.update(overrides)
        return cls(settings.log_dir, **options)

    @property
    def log_dir(self) -> Path:
        return self.rotator.root

    @property
    def display_levels(self) -> int:
        return self._display_levels

    @property
    def save_levels(self) -> int:
        return self._save_levels

    @property
    def max_archives(self) -> int:
        return self.rotator.max_archives

    @property
    def save_failure(self) -> str | None:
        """Reason file logging was switched off, if it was."""
        return self._save_failure

    def set_levels_to_display(self, levels: int) -> None:
        with self._lock:
            self._display_levels = int(levels)

    def set_levels_to_save(self, levels: int) -> None:
        with self._lock:
            self._save_levels = int(levels)

    def set_number_of_files_to_save(self, count: int) -> None:
        with self._lock:
            self.rotator.max_archives = count

    def log(self, level: int, template: str, *args: Any) -> None:
        with self._lock:
            display = is_enabled(self._display_levels, level)
            save = is_enabled(self._save_levels, level)
            if not (display or save):
                return
            record = build_record(level, template, args, self._clock())
            if display:
                self._show(record.line, color_for(record.level))
            if save:
                self._save(record)

    def trace(self, template: str, *args: Any) -> None:
        self.log(Level.TRACE, template, *args)

    def info(self, template: str, *args: Any) -> None:
        self.log(Level.INFO, template, *args)

    def debug(self, template: str, *args: Any) -> None:
        self.log(Level.DEBUG, template, *args)

    def warning(self, template: str, *args: Any) -> None:
        self.log(Level.WARNING, template, *args)

    def error(self, template: str, *args: Any) -> None:
        self.log(Level.ERROR, template, *args)

    def fatal(self, template: str, *args: Any) -> None:
        self.log(Level.FATAL, template, *args)

    def _show(self, text: str, color: Color) -> None:
        try:
            self._console.write_colored(text, color)
        except (OSError, ValueError) as exc:
            LOGGER.debug("Console write failed: %s", exc)

    def _save(self, record: LogRecord) -> None:
        try:
            self.rotator.write(record)
        except PlatyLogError as exc:
            self._disable_saving(exc)

    def _disable_saving(self, exc: PlatyLogError) -> None:
        # caller holds the lock
        self._save_levels = int(Level.NONE)
        LOGGER.info("File logging disabled: %s", exc)
        if self._save_failure is None:
            self._save_failure = str(exc)
            self._show(f"File logging disabled: {exc}", Color.YELLOW)


_default: Logger | None = None
_default_lock = threading.Lock()


def _logger_from_env() -> Logger:
    try:
        settings = LoggerSettings.from_env()
    except ConfigError as exc:
        LOGGER.info("Invalid logging configuration, using defaults: %s", exc)
        fallback = Logger()
        fallback._show(f"Invalid logging configuration, using defaults: {exc}", Color.YELLOW)
        return fallback
    return Logger.from_settings(settings)


def get_logger() -> Logger:
    """Return the process-wide logger, building it from the environment on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = _logger_from_env()
        return _default


def configure(log_dir: Path | str = "logs", **options: Any) -> Logger:
    """Replace the process-wide logger; the next saved record starts a new session."""
    global _default
    with _default_lock:
        _default = Logger(log_dir, **options)
        return _default


def reset_logger() -> None:
    global _default
    with _default_lock:
        _default = None


def trace(template: str, *args: Any) -> None:
    get_logger().trace(template, *args)


def info(template: str, *args: Any) -> None:
    get_logger().info(template, *args)


def debug(template: str, *args: Any) -> None:
    get_logger().debug(template, *args)


def warning(template: str, *args: Any) -> None:
    get_logger().warning(template, *args)


def error(template: str, *args: Any) -> None:
    get_logger().error(template, *args)


def fatal(template: str, *args: Any) -> None:
    get_logger().fatal(template, *args)
