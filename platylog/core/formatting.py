"""Header and message rendering for log records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .errors import FormatError
from .levels import level_name
from .util import clock_stamp


@dataclass(frozen=True)
class LogRecord:
    """One formatted log call, discarded once written."""

    level: int
    timestamp: datetime
    header: str
    message: str

    @property
    def line(self) -> str:
        return f"{self.header} - {self.message}"


def render_header(level: int, moment: datetime) -> str:
    """Return ``[H:M:S] <LevelName>`` for ``moment`` in local time."""
    return f"[{clock_stamp(moment)}] <{level_name(level)}>"


def render_message(template: str, args: tuple[Any, ...]) -> str:
    """Substitute ``args`` into a printf-style ``template``.

    Works like the stdlib ``logging`` module: with no arguments the template is
    returned untouched, and a single mapping argument feeds ``%(name)s``
    placeholders. A mismatch between placeholders and arguments raises
    :class:`FormatError`.
    """
    text = str(template)
    if not args:
        return text
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]  # type: ignore[assignment]
    try:
        return text % args
    except (TypeError, ValueError, KeyError) as exc:
        raise FormatError(f"{exc}") from exc


def build_record(level: int, template: str, args: tuple[Any, ...], moment: datetime) -> LogRecord:
    """Format a record, keeping the raw template when substitution fails."""
    try:
        message = render_message(template, args)
    except FormatError as exc:
        message = f"{template} [format error: {exc}]"
    return LogRecord(level, moment, render_header(level, moment), message)
