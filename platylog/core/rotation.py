"""Ownership of the active log file, its archival and archive retention.

A :class:`LogRotator` manages ``<root>/latest_log.txt`` and the
``<root>/past_logs`` directory. The first write of a session archives any
leftover active log, starts a new one headed by a ``Created - ...`` line and
then appends; every later write is a single open/append/close cycle.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .console import Color, ConsoleWriter
from .errors import ArchiveError, DirectoryError, LogWriteError, RotationError
from .formatting import LogRecord
from .util import creation_stamp

LATEST_LOG_NAME = "latest_log.txt"
ARCHIVE_DIR_NAME = "past_logs"
CREATED_PREFIX = "Created - "
DEFAULT_MAX_ARCHIVES = 5

LOGGER = logging.getLogger(__name__)


def file_creation_time(path: Path) -> float:
    """Return the birth time where the platform records one, else ``st_ctime``."""
    stat = path.stat()
    return getattr(stat, "st_birthtime", stat.st_ctime)


def creation_line(moment: datetime) -> str:
    return f"{CREATED_PREFIX}{creation_stamp(moment)}"


def archive_name_for(first_line: str) -> str:
    """Derive ``log_<stamp>.txt`` from a log's creation line.

    ``Created - 2024. 3. 7. 9:5:1`` becomes ``log_2024.3.7.9-5-1.txt``.
    """
    stamp = "".join(first_line[len(CREATED_PREFIX):].split())
    return f"log_{stamp.replace(':', '-')}.txt"


class LogRotator:
    """Writes the active log and keeps at most ``max_archives`` past logs."""

    def __init__(
        self,
        root: Path | str = "logs",
        max_archives: int = DEFAULT_MAX_ARCHIVES,
        *,
        console: ConsoleWriter | None = None,
        creation_time: Callable[[Path], float] = file_creation_time,
    ) -> None:
        self.root = Path(root)
        self.max_archives = max_archives
        self._console = console
        self._creation_time = creation_time
        self._active = False

    @property
    def latest_path(self) -> Path:
        return self.root / LATEST_LOG_NAME

    @property
    def archive_dir(self) -> Path:
        return self.root / ARCHIVE_DIR_NAME

    @property
    def active(self) -> bool:
        """True once this session has written its first record."""
        return self._active

    @property
    def max_archives(self) -> int:
        return self._max_archives

    @max_archives.setter
    def max_archives(self, value: int) -> None:
        self._max_archives = max(1, int(value))

    def ensure_directories(self) -> None:
        """Create the log root and archive directory if they are missing."""
        try:
            self.archive_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryError(f"cannot create {self.archive_dir}: {exc}") from exc

    def archives(self) -> list[Path]:
        if not self.archive_dir.is_dir():
            return []
        return [path for path in self.archive_dir.iterdir() if path.is_file()]

    def count_archives(self) -> int:
        return len(self.archives())

    def oldest_archive(self) -> Path | None:
        """Return the archive with the earliest creation time, ties by name."""
        candidates = self.archives()
        if not candidates:
            return None
        return min(candidates, key=lambda path: (self._creation_time(path), path.name))

    def evict_oldest(self) -> Path | None:
        """Delete the oldest archive and return its path."""
        oldest = self.oldest_archive()
        if oldest is None:
            return None
        self._notify(f"Maximum number of past logs reached, removing: {oldest}")
        try:
            oldest.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise RotationError(f"cannot remove {oldest}: {exc}") from exc
        LOGGER.debug("Evicted archived log %s", oldest)
        return oldest

    def archive_latest(self) -> Path:
        """Copy the active log into the archive directory and return the copy.

        The creation line is read before anything is evicted, so an unreadable
        active log leaves the archive directory untouched.
        """
        if not self.archive_dir.is_dir():
            self.ensure_directories()

        target = self.archive_dir / archive_name_for(self._read_creation_line())
        # overwriting an existing archive does not grow the count
        while not target.exists() and self.count_archives() >= self.max_archives:
            if self.evict_oldest() is None:
                break

        try:
            shutil.copyfile(self.latest_path, target)
        except OSError as exc:
            raise ArchiveError(f"cannot copy {self.latest_path} to {target}: {exc}") from exc
        LOGGER.debug("Archived %s as %s", self.latest_path, target)
        return target

    def start_session(self, moment: datetime) -> None:
        """Archive any leftover active log and start a new one."""
        self.ensure_directories()
        if self.latest_path.exists():
            self.archive_latest()
        try:
            with self.latest_path.open("w", encoding="utf-8", errors="backslashreplace") as handle:
                handle.write(f"{creation_line(moment)}\n\n")
        except (OSError, ValueError) as exc:
            raise LogWriteError(f"cannot create {self.latest_path}: {exc}") from exc
        self._active = True
        LOGGER.debug("Started log session at %s", self.latest_path)

    def write(self, record: LogRecord) -> None:
        """Append ``record`` to the active log, starting the session if needed."""
        if not self._active:
            self.start_session(record.timestamp)
        elif not self.root.is_dir():
            self.ensure_directories()
        try:
            with self.latest_path.open("a", encoding="utf-8", errors="backslashreplace") as handle:
                handle.write(f"{record.line}\n")
        except (OSError, ValueError) as exc:
            raise LogWriteError(f"cannot append to {self.latest_path}: {exc}") from exc

    def _notify(self, text: str) -> None:
        if self._console is None:
            return
        try:
            self._console.write_colored(text, Color.RED)
        except (OSError, ValueError) as exc:
            LOGGER.debug("Console write failed: %s", exc)

    def _read_creation_line(self) -> str:
        try:
            with self.latest_path.open("r", encoding="utf-8", errors="replace") as handle:
                first_line = handle.readline().rstrip("\r\n")
            modified = self.latest_path.stat().st_mtime
        except OSError as exc:
            raise ArchiveError(f"cannot read {self.latest_path}: {exc}") from exc
        if first_line.startswith(CREATED_PREFIX):
            return first_line
        # truncated or foreign file: name it after its last modification instead
        return creation_line(datetime.fromtimestamp(modified))
