"""Player history and level statistics endpoints."""

from fastapi import APIRouter, Request

from models.records import CompletionRecord, PlayerRecord

router = APIRouter()


@router.get("/players", response_model=list[PlayerRecord])
def get_players(request: Request) -> list[PlayerRecord]:
    """Get every player's best result."""
    return request.app.state.history.players


@router.get("/levels", response_model=list[CompletionRecord])
def get_level_stats(request: Request, player: str | None = None) -> list[CompletionRecord]:
    """Get level completions, optionally for one player (case-insensitive)."""
    completions = request.app.state.history.completions
    if player is None:
        return completions
    key = player.casefold()
    return [c for c in completions if c.player_name.casefold() == key]
