"""Session orchestration: plays the level sequence and records results."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path

from config import ANONYMOUS_NAME, LEVEL_STATS_FILE, PLAYER_HISTORY_FILE
from engine.history import (
    clean_name,
    record_level_completion,
    record_player_completion,
    save_level_stats,
    save_player_history,
)
from engine.level import (
    Clock,
    abandon_level,
    attempt_move,
    create_level,
    elapsed,
    is_solved,
    stop_clock,
)
from engine.loader import LevelSourceError, load_level_file
from models.level import Direction
from models.records import History
from models.session import GameSession, MoveReport, SessionStatus

logger = logging.getLogger(__name__)


def start_session(
    player_name: str,
    level_files: list[str | Path],
    history: History,
    players_path: str | Path = PLAYER_HISTORY_FILE,
    clock: Clock = time.monotonic,
) -> GameSession:
    """Begin a run through *level_files* and load the first playable level.

    Args:
        player_name: Player's name; blank names play as ANONYMOUS_NAME.
        level_files: Level files in play order.
        history: Records the session reports into.
        players_path: Player history file, written if the run ends at once.
        clock: Monotonic clock for level timing.

    Returns:
        The new session.

    Raises:
        ValueError: If there are no level files.
    """
    if not level_files:
        raise ValueError("No levels to play")

    name = clean_name(player_name).strip() or ANONYMOUS_NAME
    session = GameSession(
        player_name=name,
        level_files=[str(f) for f in level_files],
    )
    logger.info("Session started for %s with %d levels", name, len(level_files))
    _load_from(session, 0, history, players_path, clock)
    return session


def _load_from(
    session: GameSession,
    index: int,
    history: History,
    players_path: str | Path,
    clock: Clock,
) -> None:
    """Load the first level at or after *index* that parses.

    Unloadable levels are skipped; if none remain the session finishes.
    """
    session.level = None
    while index < len(session.level_files):
        path = session.level_files[index]
        try:
            grid = load_level_file(path)
        except (LevelSourceError, OSError) as e:
            session.last_error = f"Level {index + 1}: {e}"
            logger.warning("Skipping level %d (%s): %s", index + 1, path, e)
            index += 1
            continue
        session.level_index = index
        session.level = create_level(grid, clock)
        return

    session.level_index = len(session.level_files)
    _finish(session, history, players_path)


def _finish(session: GameSession, history: History, players_path: str | Path) -> None:
    """End the session and persist the player's record."""
    session.status = SessionStatus.FINISHED
    session.level = None
    record_player_completion(history, session.player_name, session.levels_completed)
    try:
        save_player_history(history, players_path)
    except OSError as e:
        logger.error("Could not save player history to %s: %s", players_path, e)
    logger.info(
        "Session finished for %s: %d levels completed",
        session.player_name, session.levels_completed,
    )


def submit_move(
    session: GameSession,
    direction: Direction,
    history: History,
    players_path: str | Path = PLAYER_HISTORY_FILE,
    stats_path: str | Path = LEVEL_STATS_FILE,
    clock: Clock = time.monotonic,
    now: datetime | None = None,
) -> MoveReport:
    """Apply one direction input to the current level.

    The win check runs after every input, accepted or rejected. A won
    level stops its clock, records and saves the completion, and loads
    the next level.

    Raises:
        ValueError: If the session has no level in play.
    """
    level = session.level
    if session.status != SessionStatus.PLAYING or level is None:
        raise ValueError("No level in play")

    level_number = session.level_number
    result = attempt_move(level, direction)
    # A level counts as won whenever no bare goal remains, even after a
    # rejected move.
    solved = is_solved(level)

    if solved:
        stop_clock(level, clock)
        record = record_level_completion(
            history, session.player_name, level_number, level, now=now, clock=clock,
        )
        try:
            save_level_stats(history, stats_path)
        except OSError as e:
            logger.error("Could not save level stats to %s: %s", stats_path, e)
        session.levels_completed += 1
        logger.info(
            "%s solved level %d in %d steps (%s)",
            session.player_name, level_number, record.steps, record.elapsed,
        )

    report = MoveReport(
        result=result,
        solved=solved,
        level_number=level_number,
        step_count=level.step_count,
        elapsed_seconds=elapsed(level, clock).total_seconds(),
        session_status=session.status,
    )

    if solved:
        _load_from(session, session.level_index + 1, history, players_path, clock)
        report.session_status = session.status

    return report


def abandon_current_level(
    session: GameSession,
    history: History,
    players_path: str | Path = PLAYER_HISTORY_FILE,
    clock: Clock = time.monotonic,
) -> None:
    """Drop the current level without completing it and go to the next.

    Raises:
        ValueError: If the session has no level in play.
    """
    if session.status != SessionStatus.PLAYING or session.level is None:
        raise ValueError("No level in play")
    abandon_level(session.level, clock)
    _load_from(session, session.level_index + 1, history, players_path, clock)
