"""Flat-file storage for level completions and player history.

Both files hold one record per line with fields separated by
FIELD_DELIMITER:

    stats:    name|level_number|steps|elapsed|completed_at
    players:  name|levels_completed|last_played

Durations are written as H:MM:SS[.ffffff] and timestamps as ISO 8601.
"""

from __future__ import annotations

import logging
import os
import re
import time
from datetime import datetime, timedelta
from pathlib import Path

from config import FIELD_DELIMITER
from engine.level import Clock, elapsed
from models.level import LevelState
from models.records import CompletionRecord, History, PlayerRecord

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(
    r"^(?:(?P<days>\d+) days?, )?(?P<hours>\d+):(?P<minutes>\d{2}):(?P<seconds>\d{2}(?:\.\d+)?)$"
)


def format_duration(value: timedelta) -> str:
    """Render a duration the way it is stored."""
    return str(value)


def parse_duration(text: str) -> timedelta:
    """Parse a stored duration.

    Raises:
        ValueError: If *text* is not a duration.
    """
    match = _DURATION_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid duration: {text!r}")
    return timedelta(
        days=int(match.group("days") or 0),
        hours=int(match.group("hours")),
        minutes=int(match.group("minutes")),
        seconds=float(match.group("seconds")),
    )


def clean_name(name: str) -> str:
    """Keep the delimiter and line breaks out of a stored name."""
    return name.replace(FIELD_DELIMITER, "/").replace("\n", " ").replace("\r", " ")


def _read_lines(path: str | Path) -> list[str]:
    if not Path(path).exists():
        return []
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f if line.strip()]


def _parse_player(line: str) -> PlayerRecord:
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < 3:
        raise ValueError(f"expected 3 fields, got {len(parts)}")
    return PlayerRecord(
        name=parts[0],
        levels_completed=int(parts[1]),
        last_played=datetime.fromisoformat(parts[2]),
    )


def _parse_completion(line: str) -> CompletionRecord:
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < 5:
        raise ValueError(f"expected 5 fields, got {len(parts)}")
    return CompletionRecord(
        player_name=parts[0],
        level_number=int(parts[1]),
        steps=int(parts[2]),
        elapsed=parse_duration(parts[3]),
        completed_at=datetime.fromisoformat(parts[4]),
    )


def load_history(players_path: str | Path, stats_path: str | Path) -> History:
    """Load both record files.

    Missing files give empty lists. Lines that cannot be parsed are
    skipped and logged.

    Args:
        players_path: Player history file.
        stats_path: Level completion file.

    Returns:
        A History holding every readable record.
    """
    history = History()
    for number, line in enumerate(_read_lines(players_path), start=1):
        try:
            history.players.append(_parse_player(line))
        except ValueError as e:
            logger.warning("Skipping player record %s:%d: %s", players_path, number, e)
    for number, line in enumerate(_read_lines(stats_path), start=1):
        try:
            history.completions.append(_parse_completion(line))
        except ValueError as e:
            logger.warning("Skipping level record %s:%d: %s", stats_path, number, e)
    logger.info(
        "Loaded %d player records and %d level records",
        len(history.players), len(history.completions),
    )
    return history


def _write_lines(lines: list[str], path: str | Path) -> None:
    """Write lines to *path* via a temporary file, then rename."""
    tmp_path = str(path) + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    os.replace(tmp_path, path)


def save_player_history(history: History, path: str | Path) -> None:
    """Persist player records (atomic write)."""
    _write_lines(
        [
            FIELD_DELIMITER.join([
                clean_name(p.name),
                str(p.levels_completed),
                p.last_played.isoformat(),
            ])
            for p in history.players
        ],
        path,
    )


def save_level_stats(history: History, path: str | Path) -> None:
    """Persist completion records (atomic write)."""
    _write_lines(
        [
            FIELD_DELIMITER.join([
                clean_name(c.player_name),
                str(c.level_number),
                str(c.steps),
                format_duration(c.elapsed),
                c.completed_at.isoformat(),
            ])
            for c in history.completions
        ],
        path,
    )


def record_level_completion(
    history: History,
    player_name: str,
    level_number: int,
    level: LevelState,
    now: datetime | None = None,
    clock: Clock = time.monotonic,
) -> CompletionRecord:
    """Append a completion built from a finished level's counters.

    Args:
        history: Records to append to (mutated in place).
        player_name: Who solved the level.
        level_number: 1-based position of the level in the sequence.
        level: The solved level; its clock should already be stopped.
        now: Completion timestamp, defaults to the current local time.
        clock: Clock used if the level clock is still running.

    Returns:
        The new record.
    """
    record = CompletionRecord(
        player_name=player_name,
        level_number=level_number,
        steps=level.step_count,
        elapsed=elapsed(level, clock),
        completed_at=now or datetime.now(),
    )
    history.completions.append(record)
    return record


def find_player(history: History, name: str) -> PlayerRecord | None:
    """Look up a player by name, ignoring case."""
    key = name.casefold()
    for player in history.players:
        if player.name.casefold() == key:
            return player
    return None


def record_player_completion(
    history: History,
    player_name: str,
    levels_completed: int,
    now: datetime | None = None,
) -> PlayerRecord:
    """Update or add the player's record after a session.

    An existing record keeps the higher of its old and new level counts.

    Returns:
        The updated or new record.
    """
    now = now or datetime.now()
    player = find_player(history, player_name)
    if player is not None:
        player.levels_completed = max(player.levels_completed, levels_completed)
        player.last_played = now
        return player

    player = PlayerRecord(
        name=player_name,
        levels_completed=levels_completed,
        last_played=now,
    )
    history.players.append(player)
    return player
