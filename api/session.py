"""Play session endpoints: start, view, move, abandon."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from engine.level import elapsed, is_solved
from engine.loader import discover_levels
from engine.session import abandon_current_level, start_session, submit_move
from models.level import Direction
from models.session import GameSession, MoveReport, SessionStatus

router = APIRouter()


class StartSessionRequest(BaseModel):
    """Request body for starting a run through the levels."""
    player_name: str = ""


class MoveRequest(BaseModel):
    """A single direction input."""
    direction: Direction


class SessionView(BaseModel):
    """Everything a renderer needs to draw the current level."""
    status: SessionStatus
    player_name: str
    level_number: int | None
    level_count: int
    levels_completed: int
    width: int | None = None
    height: int | None = None
    cells: list[list[int]] | None = None
    hero: tuple[int, int] | None = None
    step_count: int = 0
    elapsed_seconds: float = 0.0
    solved: bool = False
    last_error: str | None = None


def _get_session(request: Request) -> GameSession:
    """Get the session from app state, or 404 if none was started."""
    session = request.app.state.session
    if session is None:
        raise HTTPException(status_code=404, detail="No session has been started")
    return session


def _view(session: GameSession) -> SessionView:
    view = SessionView(
        status=session.status,
        player_name=session.player_name,
        level_number=session.level_number if session.level is not None else None,
        level_count=len(session.level_files),
        levels_completed=session.levels_completed,
        last_error=session.last_error,
    )
    level = session.level
    if level is not None:
        view.width = level.grid.width
        view.height = level.grid.height
        view.cells = level.grid.cells
        view.hero = level.hero
        view.step_count = level.step_count
        view.elapsed_seconds = elapsed(level).total_seconds()
        view.solved = is_solved(level)
    return view


@router.post("", response_model=SessionView)
def create_session(body: StartSessionRequest, request: Request) -> SessionView:
    """Start a new run through every level, replacing any current one."""
    state = request.app.state
    files = discover_levels(state.levels_dir)
    try:
        session = start_session(
            body.player_name, files, state.history, players_path=state.players_path,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    state.session = session
    return _view(session)


@router.get("", response_model=SessionView)
def get_session(request: Request) -> SessionView:
    """Get the current session and level state."""
    return _view(_get_session(request))


@router.post("/move", response_model=MoveReport)
def move(body: MoveRequest, request: Request) -> MoveReport:
    """Submit one direction input. Rejected moves are not errors."""
    state = request.app.state
    session = _get_session(request)
    if session.status != SessionStatus.PLAYING:
        raise HTTPException(status_code=409, detail="Session is finished")
    return submit_move(
        session,
        body.direction,
        state.history,
        players_path=state.players_path,
        stats_path=state.stats_path,
    )


@router.post("/abandon", response_model=SessionView)
def abandon(request: Request) -> SessionView:
    """Give up on the current level and move to the next one."""
    state = request.app.state
    session = _get_session(request)
    if session.status != SessionStatus.PLAYING:
        raise HTTPException(status_code=409, detail="Session is finished")
    abandon_current_level(session, state.history, players_path=state.players_path)
    return _view(session)
