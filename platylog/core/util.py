"""Wall-clock stamps used in log headers and creation lines."""

from __future__ import annotations

from datetime import datetime


def clock_stamp(moment: datetime) -> str:
    """Return ``H:M:S`` with unpadded fields, e.g. ``9:5:1``."""
    return f"{moment.hour}:{moment.minute}:{moment.second}"


def creation_stamp(moment: datetime) -> str:
    """Return the ``Y. M. D. H:M:S`` stamp written at the top of a new log."""
    return f"{moment.year}. {moment.month}. {moment.day}. {clock_stamp(moment)}"
