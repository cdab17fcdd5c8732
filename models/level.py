"""Level grid, live level state, and move models."""

from enum import Enum

from pydantic import BaseModel

from models.cells import Cell


class Direction(str, Enum):
    """The four directions the hero can step in."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) offset for one step, y growing downwards."""
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class MoveResult(str, Enum):
    """Outcome of one direction input."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LevelGrid(BaseModel):
    """A rectangular grid of cell codes, indexed as cells[y][x]."""
    cells: list[list[int]]

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.width

    def cell(self, x: int, y: int) -> Cell:
        """Cell code at (x, y). Caller checks bounds."""
        return Cell(self.cells[y][x])


class LevelState(BaseModel):
    """The live state of one level being played."""
    grid: LevelGrid
    hero: tuple[int, int] | None = None  # (x, y), mirrors the hero cell
    step_count: int = 0                  # Accepted moves only
    started_at: float                    # Monotonic clock reading
    stopped_at: float | None = None      # Set on completion or abandon

    @property
    def is_running(self) -> bool:
        return self.stopped_at is None
