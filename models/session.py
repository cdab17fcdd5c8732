"""Play session models: a player working through the level sequence."""

from enum import Enum

from pydantic import BaseModel

from models.level import LevelState, MoveResult


class SessionStatus(str, Enum):
    """Possible states for a session."""
    PLAYING = "playing"             # A level is loaded and accepting moves
    FINISHED = "finished"           # Every level has been left


class GameSession(BaseModel):
    """One player's run through the level files."""
    player_name: str
    level_files: list[str]
    level_index: int = 0            # Index into level_files of the current level
    levels_completed: int = 0
    status: SessionStatus = SessionStatus.PLAYING
    level: LevelState | None = None
    last_error: str | None = None   # Why the last skipped level could not load

    @property
    def level_number(self) -> int:
        return self.level_index + 1


class MoveReport(BaseModel):
    """What the session reports back after one direction input."""
    result: MoveResult
    solved: bool
    level_number: int
    step_count: int
    elapsed_seconds: float
    session_status: SessionStatus
