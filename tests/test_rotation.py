"""Active log ownership, archival naming and retention."""
from __future__ import annotations

import os
import random
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from platylog.core.console import Color
from platylog.core.errors import ArchiveError
from platylog.core.formatting import LogRecord, build_record
from platylog.core.levels import Level
from platylog.core.rotation import (
    LogRotator,
    archive_name_for,
    creation_line,
)

START = datetime(2024, 3, 7, 9, 5, 1)


def _record(moment: datetime, text: str = "hello") -> LogRecord:
    return build_record(Level.INFO, text, (), moment)


def _seed_latest(rotator: LogRotator, first_line: str) -> None:
    rotator.root.mkdir(parents=True, exist_ok=True)
    rotator.latest_path.write_text(f"{first_line}\n\nold body\n", encoding="utf-8")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Created - 2024. 3. 7. 9:5:1", "log_2024.3.7.9-5-1.txt"),
        ("Created - 2024. 3. 7. 9:5:1\n", "log_2024.3.7.9-5-1.txt"),
        ("Created - 2025. 12. 31. 23:59:59", "log_2025.12.31.23-59-59.txt"),
    ],
)
def test_archive_name_for(line: str, expected: str) -> None:
    assert archive_name_for(line) == expected


def test_creation_line() -> None:
    assert creation_line(START) == "Created - 2024. 3. 7. 9:5:1"


def test_first_write_creates_directories_and_header(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path / "logs")
    assert not rotator.active

    rotator.write(_record(START, "first"))

    assert rotator.active
    assert rotator.archive_dir.is_dir()
    assert rotator.latest_path.read_text(encoding="utf-8") == (
        "Created - 2024. 3. 7. 9:5:1\n\n[9:5:1] <Info> - first\n"
    )
    assert rotator.count_archives() == 0


def test_leftover_log_is_archived_by_copy(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path)
    _seed_latest(rotator, "Created - 2024. 1. 2. 3:4:5")

    rotator.write(_record(START, "new session"))

    archived = rotator.archive_dir / "log_2024.1.2.3-4-5.txt"
    assert archived.read_text(encoding="utf-8").endswith("old body\n")
    latest = rotator.latest_path.read_text(encoding="utf-8")
    assert latest.startswith("Created - 2024. 3. 7. 9:5:1\n\n")
    assert "old body" not in latest


def test_archive_overwrites_same_name(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path)
    rotator.ensure_directories()
    (rotator.archive_dir / "log_2024.1.2.3-4-5.txt").write_text("stale", encoding="utf-8")
    _seed_latest(rotator, "Created - 2024. 1. 2. 3:4:5")

    target = rotator.archive_latest()

    assert target.read_text(encoding="utf-8").endswith("old body\n")
    assert rotator.latest_path.exists()


def test_oldest_archive_is_evicted_first(tmp_path: Path, console) -> None:
    times = {"log_a.txt": 30.0, "log_b.txt": 10.0, "log_c.txt": 20.0}
    rotator = LogRotator(
        tmp_path, 3, console=console, creation_time=lambda path: times.get(path.name, 99.0)
    )
    rotator.ensure_directories()
    for name in times:
        (rotator.archive_dir / name).write_text(name, encoding="utf-8")
    _seed_latest(rotator, "Created - 2024. 3. 7. 9:5:1")

    rotator.archive_latest()

    names = sorted(path.name for path in rotator.archives())
    assert names == ["log_2024.3.7.9-5-1.txt", "log_a.txt", "log_c.txt"]
    text, color = console.lines[0]
    assert text.startswith("Maximum number of past logs reached, removing: ")
    assert text.endswith("log_b.txt")
    assert color is Color.RED


def test_creation_time_ties_break_by_name(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path, creation_time=lambda path: 0.0)
    rotator.ensure_directories()
    for name in ("log_z.txt", "log_m.txt", "log_b.txt"):
        (rotator.archive_dir / name).touch()

    assert rotator.oldest_archive() == rotator.archive_dir / "log_b.txt"


def test_evict_oldest_on_empty_directory(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path)
    rotator.ensure_directories()
    assert rotator.evict_oldest() is None


def test_subdirectories_are_not_counted(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path, 1)
    rotator.ensure_directories()
    (rotator.archive_dir / "nested").mkdir()
    _seed_latest(rotator, "Created - 2024. 3. 7. 9:5:1")

    rotator.archive_latest()

    assert rotator.count_archives() == 1
    assert (rotator.archive_dir / "nested").is_dir()


def test_lowering_the_cap_evicts_down_to_it(tmp_path: Path) -> None:
    times = {f"log_{index}.txt": float(index) for index in range(4)}
    rotator = LogRotator(tmp_path, 5, creation_time=lambda path: times.get(path.name, 99.0))
    rotator.ensure_directories()
    for name in times:
        (rotator.archive_dir / name).touch()
    _seed_latest(rotator, "Created - 2024. 3. 7. 9:5:1")

    rotator.max_archives = 2
    rotator.archive_latest()

    assert sorted(path.name for path in rotator.archives()) == [
        "log_2024.3.7.9-5-1.txt",
        "log_3.txt",
    ]


@pytest.mark.parametrize("seed", range(6))
def test_archive_count_never_exceeds_cap(tmp_path: Path, seed: int) -> None:
    rng = random.Random(seed)
    for session in range(rng.randint(4, 15)):
        cap = rng.randint(1, 4)
        rotator = LogRotator(tmp_path, cap)
        moment = START + timedelta(minutes=session)
        for offset in range(rng.randint(1, 3)):
            rotator.write(_record(moment + timedelta(seconds=offset)))
        assert rotator.count_archives() <= cap


def test_max_archives_is_at_least_one(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path, 0)
    assert rotator.max_archives == 1
    rotator.max_archives = -3
    assert rotator.max_archives == 1


def test_unreadable_active_log_raises_and_keeps_archives(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path, 1)
    rotator.ensure_directories()
    kept = rotator.archive_dir / "log_keep.txt"
    kept.write_text("keep", encoding="utf-8")
    rotator.latest_path.mkdir()

    with pytest.raises(ArchiveError):
        rotator.archive_latest()

    assert kept.read_text(encoding="utf-8") == "keep"
    assert rotator.latest_path.is_dir()


def test_log_without_creation_line_is_named_after_mtime(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path)
    rotator.root.mkdir(parents=True, exist_ok=True)
    rotator.latest_path.write_text("", encoding="utf-8")
    stamp = datetime(2023, 11, 5, 8, 0, 9).timestamp()
    os.utime(rotator.latest_path, (stamp, stamp))

    target = rotator.archive_latest()

    assert target.name == "log_2023.11.5.8-0-9.txt"


class BrokenConsole:
    def write_colored(self, text: str, color: Color) -> None:
        raise ValueError("I/O operation on closed file.")


def test_eviction_survives_broken_console(tmp_path: Path) -> None:
    rotator = LogRotator(tmp_path, 1, console=BrokenConsole())
    rotator.ensure_directories()
    (rotator.archive_dir / "log_old.txt").write_text("old", encoding="utf-8")
    _seed_latest(rotator, "Created - 2024. 3. 7. 9:5:1")

    target = rotator.archive_latest()

    assert [path.name for path in rotator.archives()] == [target.name]


def test_overwriting_an_archive_evicts_nothing(tmp_path: Path, console) -> None:
    rotator = LogRotator(tmp_path, 2, console=console, creation_time=lambda path: 0.0)
    rotator.ensure_directories()
    (rotator.archive_dir / "log_0.txt").write_text("older", encoding="utf-8")
    (rotator.archive_dir / "log_2024.3.7.9-5-1.txt").write_text("stale", encoding="utf-8")
    _seed_latest(rotator, "Created - 2024. 3. 7. 9:5:1")

    rotator.archive_latest()

    assert sorted(path.name for path in rotator.archives()) == [
        "log_0.txt",
        "log_2024.3.7.9-5-1.txt",
    ]
    assert console.lines == []
