"""Level state engine: hero movement, box pushing, and win detection.

A move relocates occupants (hero, box) between cells; it never changes a
cell's floor. Walls never change and goals are neither created nor removed.
Rejected moves leave the level untouched.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import timedelta

from models.cells import Cell, Occupant, with_occupant
from models.level import Direction, LevelGrid, LevelState, MoveResult

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def locate_hero(grid: LevelGrid) -> tuple[int, int] | None:
    """Find the first hero cell in row-major order.

    Args:
        grid: The grid to scan.

    Returns:
        (x, y) of the hero, or None if the grid has no hero.
    """
    for y, row in enumerate(grid.cells):
        for x, code in enumerate(row):
            if code in (Cell.HERO, Cell.HERO_ON_GOAL):
                return (x, y)
    return None


def create_level(grid: LevelGrid, clock: Clock = time.monotonic) -> LevelState:
    """Start a fresh level from a loaded grid.

    The grid is copied so the caller's grid is never mutated. Step count
    starts at zero and the clock starts now.
    """
    own_grid = grid.model_copy(deep=True)
    return LevelState(
        grid=own_grid,
        hero=locate_hero(own_grid),
        started_at=clock(),
    )


def _is_empty_or_goal(cell: Cell) -> bool:
    return cell in (Cell.EMPTY, Cell.GOAL)


def _relocate(
    grid: LevelGrid,
    occupant: Occupant,
    source: tuple[int, int],
    dest: tuple[int, int],
) -> None:
    """Move *occupant* from *source* to *dest*, keeping both floors."""
    sx, sy = source
    dx, dy = dest
    grid.cells[sy][sx] = with_occupant(grid.cell(sx, sy), Occupant.NONE).value
    grid.cells[dy][dx] = with_occupant(grid.cell(dx, dy), occupant).value


def attempt_move(level: LevelState, direction: Direction) -> MoveResult:
    """Try to step the hero one cell in *direction*, pushing a box if needed.

    The target cell must be in bounds and not a wall. If it holds a box,
    the cell beyond must be in bounds and empty or a bare goal; the box
    moves there and the hero follows. Any other case is rejected without
    touching the level.

    Args:
        level: The level being played (mutated in place on acceptance).
        direction: Direction of the step.

    Returns:
        MoveResult.ACCEPTED if the hero moved, else MoveResult.REJECTED.
    """
    if level.hero is None or not level.is_running:
        return MoveResult.REJECTED

    grid = level.grid
    dx, dy = direction.delta
    hx, hy = level.hero
    tx, ty = hx + dx, hy + dy

    if not grid.in_bounds(tx, ty):
        return MoveResult.REJECTED

    target = grid.cell(tx, ty)
    if target.is_wall:
        return MoveResult.REJECTED

    if target.has_box:
        bx, by = tx + dx, ty + dy
        if not grid.in_bounds(bx, by):
            return MoveResult.REJECTED
        if not _is_empty_or_goal(grid.cell(bx, by)):
            return MoveResult.REJECTED
        _relocate(grid, Occupant.BOX, (tx, ty), (bx, by))

    _relocate(grid, Occupant.HERO, (hx, hy), (tx, ty))
    level.hero = (tx, ty)
    level.step_count += 1

    logger.debug(
        "Hero moved %s to (%d, %d), step %d",
        direction.value, tx, ty, level.step_count,
    )
    return MoveResult.ACCEPTED


def is_solved(level: LevelState) -> bool:
    """Check whether no bare goal cell remains.

    A goal counts as covered when a box or the hero stands on it.
    """
    return all(
        code != Cell.GOAL
        for row in level.grid.cells
        for code in row
    )


def stop_clock(level: LevelState, clock: Clock = time.monotonic) -> None:
    """Stop the level clock. Stopping twice keeps the first reading."""
    if level.stopped_at is None:
        level.stopped_at = clock()


def abandon_level(level: LevelState, clock: Clock = time.monotonic) -> None:
    """Give up on a level: the clock stops and no further moves apply."""
    stop_clock(level, clock)
    logger.info("Level abandoned after %d steps", level.step_count)


def elapsed(level: LevelState, clock: Clock = time.monotonic) -> timedelta:
    """Time spent on the level, up to now or to when the clock stopped."""
    end = level.stopped_at if level.stopped_at is not None else clock()
    return timedelta(seconds=max(0.0, end - level.started_at))
