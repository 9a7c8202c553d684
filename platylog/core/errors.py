"""Error types raised inside the logging core."""

from __future__ import annotations


class PlatyLogError(Exception):
    """Base class for every error raised by platylog."""


class ConfigError(PlatyLogError, ValueError):
    """A configuration value could not be parsed."""


class FormatError(PlatyLogError):
    """A message template did not match its arguments."""


class RotationError(PlatyLogError, OSError):
    """The log file or archive directory could not be managed."""


class DirectoryError(RotationError):
    """The log root or archive directory could not be created."""


class ArchiveError(RotationError):
    """The active log could not be read while archiving it."""


class LogWriteError(RotationError):
    """The active log could not be opened for writing."""
