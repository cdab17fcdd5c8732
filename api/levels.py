"""Level listing and inspection endpoints."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from engine.level import locate_hero
from engine.loader import LevelSourceError, discover_levels, load_level_file

router = APIRouter()


class LevelSummary(BaseModel):
    """A level file available for play."""
    number: int
    file_name: str


class LevelDetail(BaseModel):
    """A parsed level as stored on disk."""
    number: int
    file_name: str
    width: int
    height: int
    cells: list[list[int]]
    hero: tuple[int, int] | None


@router.get("", response_model=list[LevelSummary])
def list_levels(request: Request) -> list[LevelSummary]:
    """List level files in play order."""
    files = discover_levels(request.app.state.levels_dir)
    return [
        LevelSummary(number=i + 1, file_name=path.name)
        for i, path in enumerate(files)
    ]


@router.get("/{number}", response_model=LevelDetail)
def get_level(number: int, request: Request) -> LevelDetail:
    """Parse and return one level by its 1-based number."""
    files = discover_levels(request.app.state.levels_dir)
    if not 1 <= number <= len(files):
        raise HTTPException(status_code=404, detail=f"Level {number} not found")

    path = files[number - 1]
    try:
        grid = load_level_file(path)
    except LevelSourceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OSError as e:
        raise HTTPException(status_code=404, detail=f"Cannot read {path.name}: {e}")

    return LevelDetail(
        number=number,
        file_name=path.name,
        width=grid.width,
        height=grid.height,
        cells=grid.cells,
        hero=locate_hero(grid),
    )
