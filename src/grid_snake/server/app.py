"""FastAPI application factory for the snake host."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from grid_snake.server.routes import router
from grid_snake.server.session_manager import SessionManager
from grid_snake.server.websocket import ws_router


def create_app(max_finished_games: int = 100) -> FastAPI:
    """Build the application.

    The session registry is created on startup and stored on
    ``app.state.session_manager``; shutdown closes every open socket.
    *max_finished_games* bounds how many lost or won games stay queryable.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        manager = SessionManager(max_finished_games=max_finished_games)
        app.state.session_manager = manager
        try:
            yield
        finally:
            await manager.cleanup()

    app = FastAPI(title="Grid Snake", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    app.include_router(ws_router)
    return app
