"""FastAPI app entry point for the box-pushing puzzle server.

Usage:
    uvicorn main:app --reload
"""

import logging
from pathlib import Path

from fastapi import FastAPI

from api.history import router as history_router
from api.levels import router as levels_router
from api.session import router as session_router
from config import (
    LEVEL_STATS_FILE,
    LEVELS_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    PLAYER_HISTORY_FILE,
)
from engine.history import load_history

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def create_app(
    levels_dir: str | Path = LEVELS_DIR,
    players_path: str | Path = PLAYER_HISTORY_FILE,
    stats_path: str | Path = LEVEL_STATS_FILE,
) -> FastAPI:
    """Build the app with its level directory and record files.

    Persisted history is loaded once here; the single play session starts
    empty.
    """
    app = FastAPI(
        title="Boxpusher Server",
        description="Box-pushing puzzle levels played over HTTP",
        version="0.1.0",
    )
    app.state.levels_dir = Path(levels_dir)
    app.state.players_path = Path(players_path)
    app.state.stats_path = Path(stats_path)
    app.state.history = load_history(players_path, stats_path)
    app.state.session = None

    app.include_router(levels_router, prefix="/levels", tags=["Levels"])
    app.include_router(session_router, prefix="/session", tags=["Session"])
    app.include_router(history_router, prefix="/history", tags=["History"])

    @app.get("/")
    def root() -> dict:
        """Root endpoint returning server info."""
        return {"name": "Boxpusher Server", "version": "0.1.0", "status": "running"}

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint."""
        return {"healthy": True}

    logger.info("Serving levels from %s", app.state.levels_dir)
    return app


app = create_app()
