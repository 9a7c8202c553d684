"""Initial logger configuration from the environment and a local .env file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from .errors import ConfigError
from .flags import flag
from .levels import Level, parse_levels
from .rotation import DEFAULT_MAX_ARCHIVES

ENV_PATH = Path(".env")
ENV_PREFIX = "PLATYLOG_"


def load_settings(env_path: Path | str | None = None) -> dict[str, str]:
    """Merge ``PLATYLOG_*`` keys from the .env file and the process environment.

    Values already present in the environment win over the file.
    """
    path = Path(env_path) if env_path else ENV_PATH
    values: dict[str, str] = {}
    if path.exists():
        values.update(
            {key: value for key, value in dotenv_values(path).items() if value is not None}
        )
    values.update({key: value for key, value in os.environ.items() if key.startswith(ENV_PREFIX)})
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


def _max_archives(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"PLATYLOG_MAX_ARCHIVES must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"PLATYLOG_MAX_ARCHIVES must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class LoggerSettings:
    log_dir: Path = field(default_factory=lambda: Path("logs"))
    max_archives: int = DEFAULT_MAX_ARCHIVES
    display_levels: int = int(Level.ALL)
    save_levels: int = int(Level.ALL)
    color: bool = True

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> LoggerSettings:
        """Build settings from ``env``, or from :func:`load_settings` when omitted."""
        values = load_settings() if env is None else env
        return cls(
            log_dir=Path(values.get("PLATYLOG_DIR") or "logs"),
            max_archives=_max_archives(values.get("PLATYLOG_MAX_ARCHIVES") or str(DEFAULT_MAX_ARCHIVES)),
            display_levels=parse_levels(values.get("PLATYLOG_DISPLAY_LEVELS") or "all"),
            save_levels=parse_levels(values.get("PLATYLOG_SAVE_LEVELS") or "all"),
            color=flag("PLATYLOG_COLOR", "1", values),
        )
