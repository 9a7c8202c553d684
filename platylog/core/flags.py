"""Boolean toggles read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

_ON_VALUES = {"1", "true", "yes", "y", "on"}


def flag(name: str, default: str = "0", env: Mapping[str, str] | None = None) -> bool:
    """Return True when the variable resolves to an on-value."""
    source = os.environ if env is None else env
    return (source.get(name, default) or "").strip().lower() in _ON_VALUES
