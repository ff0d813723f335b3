"""REST API route handlers for game lifecycle and moves."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from grid_snake.direction import parse_direction
from grid_snake.errors import GameOverError
from grid_snake.server.models import CreateGameRequest, GameSummary, MoveRequest

router = APIRouter(prefix="/games", tags=["games"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Start a new game."""
    manager = _get_manager(request)
    try:
        game = manager.create_game(
            width=body.width, height=body.height, seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return game.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List running games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get the full board snapshot."""
    game = _get_manager(request).get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return game.get_state()


@router.post("/{game_id}/move")
async def move(game_id: str, body: MoveRequest, request: Request) -> dict:
    """Advance the game by one move."""
    direction = parse_direction(body.direction)
    if direction is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown direction '{body.direction}'.",
        )
    try:
        return await _get_manager(request).move(game_id, direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except GameOverError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.post("/{game_id}/restart")
async def restart(game_id: str, request: Request) -> dict:
    """Start the game over on a fresh board of the same size."""
    try:
        return await _get_manager(request).restart(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: str, request: Request) -> Response:
    """Remove a game and close its sockets."""
    try:
        await _get_manager(request).delete_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
