"""Persisted completion and player records."""

from datetime import datetime, timedelta

from pydantic import BaseModel


class CompletionRecord(BaseModel):
    """One solved level."""
    player_name: str
    level_number: int               # 1-based position in the level sequence
    steps: int
    elapsed: timedelta
    completed_at: datetime


class PlayerRecord(BaseModel):
    """Best result seen for a player. Names compare case-insensitively."""
    name: str
    levels_completed: int
    last_played: datetime


class History(BaseModel):
    """All persisted records, owned by whoever drives the game."""
    players: list[PlayerRecord] = []
    completions: list[CompletionRecord] = []
