"""Shared fixtures for the platylog test-suite."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from platylog.core.console import Color
from platylog.core.logger import reset_logger


class RecordingConsole:
    """Console writer that keeps every line instead of printing it."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, Color]] = []

    def write_colored(self, text: str, color: Color) -> None:
        self.lines.append((text, color))

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.lines]


class SteppingClock:
    """Returns ``start`` advanced by one second on every call."""

    def __init__(self, start: datetime) -> None:
        self._next = start

    def __call__(self) -> datetime:
        moment = self._next
        self._next += timedelta(seconds=1)
        return moment


@pytest.fixture()
def console() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture()
def clock() -> SteppingClock:
    return SteppingClock(datetime(2024, 3, 7, 9, 5, 1))


@pytest.fixture(autouse=True)
def _fresh_default_logger():
    reset_logger()
    yield
    reset_logger()
