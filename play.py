"""Console front end for the box-pushing puzzle.

Plays the level files locally, one typed command per turn, and shows the
persisted player history and level statistics.

Usage:
    python play.py                       # interactive menu
    python play.py play --name Alice     # play every level straight away
    python play.py players               # list player history
    python play.py stats                 # list level completions

Controls while playing (type, then Enter):
    w/a/s/d, k/h/j/l or up/left/down/right  move
    q or esc                                abandon the level

Environment variables:
    BOXPUSHER_LEVELS_DIR  - directory with level*.txt files (default: levels)
    DATA_DIR              - where the record files are kept (default: .)
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import timedelta
from pathlib import Path

from config import (
    ANONYMOUS_NAME,
    DATA_DIR,
    LEVEL_STATS_NAME,
    LEVELS_DIR,
    LOG_FORMAT,
    PLAYER_HISTORY_NAME,
)
from engine.history import load_history
from engine.level import elapsed
from engine.loader import discover_levels
from engine.session import abandon_current_level, start_session, submit_move
from models.cells import Cell
from models.level import Direction, LevelState
from models.records import History
from models.session import GameSession, SessionStatus

QUIT = "quit"

KEY_BINDINGS: dict[str, Direction | str] = {
    "w": Direction.UP, "k": Direction.UP, "up": Direction.UP,
    "s": Direction.DOWN, "j": Direction.DOWN, "down": Direction.DOWN,
    "a": Direction.LEFT, "h": Direction.LEFT, "left": Direction.LEFT,
    "d": Direction.RIGHT, "l": Direction.RIGHT, "right": Direction.RIGHT,
    "q": QUIT, "esc": QUIT, "\x1b": QUIT,
}

CELL_GLYPHS = {
    Cell.EMPTY: " ",
    Cell.WALL: "#",
    Cell.BOX: "$",
    Cell.GOAL: ".",
    Cell.HERO: "@",
    Cell.BOX_ON_GOAL: "*",
    Cell.HERO_ON_GOAL: "+",
}


def parse_command(text: str) -> Direction | str | None:
    """Map typed input to a direction, QUIT, or None if unrecognised."""
    return KEY_BINDINGS.get(text.strip().lower())


def format_clock(value: timedelta) -> str:
    """Render a duration as mm:ss."""
    total = int(value.total_seconds())
    minutes, seconds = divmod(total, 60)
    return f"{minutes:02d}:{seconds:02d}"


def render_level(level: LevelState, level_number: int) -> str:
    """Draw the level grid and its status line."""
    lines = [f"Level {level_number}", ""]
    for row in level.grid.cells:
        lines.append("".join(CELL_GLYPHS.get(Cell(code), " ") for code in row))
    lines.append("")
    lines.append(f"Steps: {level.step_count} | Time: {format_clock(elapsed(level))}")
    return "\n".join(lines)


def _paths(data_dir: str) -> tuple[Path, Path]:
    base = Path(data_dir)
    return base / PLAYER_HISTORY_NAME, base / LEVEL_STATS_NAME


def play_session(
    session: GameSession,
    history: History,
    players_path: Path,
    stats_path: Path,
    read=input,
    write=print,
) -> None:
    """Run the turn loop until every level has been solved or abandoned."""
    while session.status == SessionStatus.PLAYING and session.level is not None:
        write(render_level(session.level, session.level_number))
        try:
            command = parse_command(read("> "))
        except EOFError:
            command = QUIT

        if command is None:
            continue
        if command == QUIT:
            number = session.level_number
            abandon_current_level(session, history, players_path=players_path)
            write(f"Level {number} abandoned.")
            continue

        report = submit_move(
            session, command, history,
            players_path=players_path, stats_path=stats_path,
        )
        if report.solved:
            write(
                f"Level {report.level_number} complete! Steps: {report.step_count}, "
                f"Time: {format_clock(timedelta(seconds=report.elapsed_seconds))}"
            )

    if session.last_error:
        write(f"Note: {session.last_error}")
    write(
        f"Game over, {session.player_name}: "
        f"{session.levels_completed}/{len(session.level_files)} levels completed."
    )


def show_players(history: History, write=print) -> None:
    """Print the player history table."""
    if not history.players:
        write("No player history found.")
        return
    for player in history.players:
        write(
            f"Player: {player.name}, Levels completed: {player.levels_completed}, "
            f"Last played: {player.last_played:%Y-%m-%d %H:%M}"
        )


def show_stats(history: History, write=print) -> None:
    """Print every recorded level completion."""
    if not history.completions:
        write("No level statistics found.")
        return
    for record in history.completions:
        write(
            f"Player: {record.player_name}, Level: {record.level_number}, "
            f"Steps: {record.steps}, Time: {format_clock(record.elapsed)}, "
            f"Completed: {record.completed_at:%Y-%m-%d %H:%M}"
        )


def start_game(
    levels_dir: str,
    history: History,
    players_path: Path,
    stats_path: Path,
    name: str | None = None,
    read=input,
    write=print,
) -> None:
    """Ask for a name if needed and play every level in order."""
    files = discover_levels(levels_dir)
    if not files:
        write(f"No levels found! Add level*.txt files to {levels_dir}.")
        return
    if name is None:
        try:
            name = read("Enter your name: ")
        except EOFError:
            name = ANONYMOUS_NAME
    session = start_session(name, files, history, players_path=players_path)
    play_session(session, history, players_path, stats_path, read=read, write=write)


def menu(levels_dir: str, data_dir: str, read=input, write=print) -> None:
    """Interactive main menu."""
    players_path, stats_path = _paths(data_dir)
    history = load_history(players_path, stats_path)

    while True:
        write("=== Boxpusher ===")
        if discover_levels(levels_dir):
            write("1. New game")
        else:
            write(f"No levels found! Add level*.txt files to {levels_dir}.")
        write("2. Player history")
        write("3. Level statistics")
        write("4. Exit")
        try:
            choice = read("Choose an option: ").strip()
        except EOFError:
            return

        if choice == "1":
            start_game(levels_dir, history, players_path, stats_path, read=read, write=write)
        elif choice == "2":
            show_players(history, write=write)
        elif choice == "3":
            show_stats(history, write=write)
        elif choice == "4":
            return


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the box-pushing puzzle")

    parser.add_argument(
        "--levels-dir", default=LEVELS_DIR, help=f"Level directory (default: {LEVELS_DIR})",
    )
    parser.add_argument(
        "--data-dir", default=DATA_DIR, help=f"Record file directory (default: {DATA_DIR})",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command")

    play_parser = subparsers.add_parser("play", help="Play every level in order")
    play_parser.add_argument("--name", default=None, help="Player name")

    subparsers.add_parser("players", help="List player history")
    subparsers.add_parser("stats", help="List level completions")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    players_path, stats_path = _paths(args.data_dir)

    if args.command is None:
        menu(args.levels_dir, args.data_dir)
    elif args.command == "play":
        history = load_history(players_path, stats_path)
        start_game(args.levels_dir, history, players_path, stats_path, name=args.name)
    elif args.command == "players":
        show_players(load_history(players_path, stats_path))
    elif args.command == "stats":
        show_stats(load_history(players_path, stats_path))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
