"""Cell codes and their decomposition into occupant and floor flags.

Each grid position is stored as a single digit code. The code packs two
independent facts, what stands on the cell and what kind of floor it is:

    code | occupant | floor
    -----+----------+------
      0  | none     | plain
      1  | wall     |
      2  | box      | plain
      3  | none     | goal
      4  | hero     | plain
      5  | box      | goal
      6  | hero     | goal
"""

from enum import Enum, IntEnum


class Occupant(str, Enum):
    """What stands on a non-wall cell."""
    NONE = "none"
    BOX = "box"
    HERO = "hero"


class Floor(str, Enum):
    """Floor type of a non-wall cell. Goals never move."""
    PLAIN = "plain"
    GOAL = "goal"


class Cell(IntEnum):
    """The encoded cell states a level grid may hold."""
    EMPTY = 0
    WALL = 1
    BOX = 2
    GOAL = 3
    HERO = 4
    BOX_ON_GOAL = 5
    HERO_ON_GOAL = 6

    @property
    def is_wall(self) -> bool:
        return self is Cell.WALL

    @property
    def occupant(self) -> Occupant:
        """The occupant flag. Walls report no occupant."""
        return _DECOMPOSED[self][0]

    @property
    def floor(self) -> Floor:
        """The floor flag. Walls report plain floor."""
        return _DECOMPOSED[self][1]

    @property
    def has_box(self) -> bool:
        return self.occupant is Occupant.BOX

    @property
    def has_hero(self) -> bool:
        return self.occupant is Occupant.HERO

    @property
    def is_goal(self) -> bool:
        return not self.is_wall and self.floor is Floor.GOAL


_DECOMPOSED: dict[Cell, tuple[Occupant, Floor]] = {
    Cell.EMPTY: (Occupant.NONE, Floor.PLAIN),
    Cell.WALL: (Occupant.NONE, Floor.PLAIN),
    Cell.BOX: (Occupant.BOX, Floor.PLAIN),
    Cell.GOAL: (Occupant.NONE, Floor.GOAL),
    Cell.HERO: (Occupant.HERO, Floor.PLAIN),
    Cell.BOX_ON_GOAL: (Occupant.BOX, Floor.GOAL),
    Cell.HERO_ON_GOAL: (Occupant.HERO, Floor.GOAL),
}

_COMPOSED: dict[tuple[Occupant, Floor], Cell] = {
    flags: cell for cell, flags in _DECOMPOSED.items() if cell is not Cell.WALL
}


def compose_cell(occupant: Occupant, floor: Floor) -> Cell:
    """Build the cell code for an (occupant, floor) pair."""
    return _COMPOSED[(occupant, floor)]


def with_occupant(cell: Cell, occupant: Occupant) -> Cell:
    """Return *cell* with its occupant replaced and its floor kept.

    Raises:
        ValueError: If *cell* is a wall.
    """
    if cell.is_wall:
        raise ValueError("A wall cell cannot take an occupant")
    return compose_cell(occupant, cell.floor)
