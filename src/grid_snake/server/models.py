"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from grid_snake.game import GameStatus


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    width: int = Field(default=10, ge=1, le=200)
    height: int | None = Field(default=None, ge=1, le=200)
    seed: int | None = None


class MoveRequest(BaseModel):
    """Request body for POST /games/{game_id}/move."""

    direction: str = Field(min_length=1, max_length=16)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    length: int
    width: int
    height: int
