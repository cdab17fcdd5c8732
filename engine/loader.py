"""Level source parsing, validation, and level file discovery."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from config import LEVEL_GLOB
from models.cells import Cell
from models.level import LevelGrid

logger = logging.getLogger(__name__)

_VALID_CHARS = frozenset(str(cell.value) for cell in Cell)


class LevelSourceError(ValueError):
    """Base class for malformed level sources."""


class EmptyLevelError(LevelSourceError):
    """The level source has no rows."""

    def __init__(self) -> None:
        super().__init__("Level source is empty")


class InconsistentRowLengthError(LevelSourceError):
    """A row differs in length from the first row."""

    def __init__(self, row: int, expected: int, actual: int) -> None:
        self.row = row
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row} has length {actual}, expected {expected}"
        )


class InvalidCharacterError(LevelSourceError):
    """A character is not one of the defined cell codes."""

    def __init__(self, char: str, row: int, column: int) -> None:
        self.char = char
        self.row = row
        self.column = column
        super().__init__(
            f"Invalid character {char!r} at row {row}, column {column}"
        )


def parse_level(lines: Sequence[str]) -> LevelGrid:
    """Parse level source rows into a validated grid.

    Each row is a string of cell-code digits; every row must have the same
    length. Line endings are stripped before validation.

    Args:
        lines: The level rows, top to bottom.

    Returns:
        A LevelGrid with one cell per character.

    Raises:
        EmptyLevelError: If there are no rows.
        InconsistentRowLengthError: If a row's length differs from the first.
        InvalidCharacterError: If a character is not a digit 0-6.
    """
    rows = [line.rstrip("\r\n") for line in lines]
    if not rows:
        raise EmptyLevelError()

    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise InconsistentRowLengthError(y, width, len(row))

    cells: list[list[int]] = []
    for y, row in enumerate(rows):
        parsed = []
        for x, char in enumerate(row):
            if char not in _VALID_CHARS:
                raise InvalidCharacterError(char, y, x)
            parsed.append(int(char))
        cells.append(parsed)

    return LevelGrid(cells=cells)


def load_level_file(path: str | Path) -> LevelGrid:
    """Read and parse a level file.

    Raises:
        FileNotFoundError: If the file does not exist.
        LevelSourceError: If the contents are malformed. The message
            names the file.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    # read_text turns \r\n and \r into \n; no other character ends a row.
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    try:
        grid = parse_level(lines)
    except LevelSourceError as e:
        e.args = (f"{e} in {path.name}",)
        raise
    logger.info("Loaded level %s (%dx%d)", path.name, grid.width, grid.height)
    return grid


def discover_levels(directory: str | Path, pattern: str = LEVEL_GLOB) -> list[Path]:
    """List the level files in *directory*, sorted by file name.

    A missing directory yields no levels.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Level directory %s does not exist", directory)
        return []
    return sorted(
        (p for p in directory.glob(pattern) if p.is_file()),
        key=lambda p: p.name,
    )
