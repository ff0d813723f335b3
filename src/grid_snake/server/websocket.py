"""WebSocket handler for key-driven play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from grid_snake.direction import parse_direction
from grid_snake.errors import GameOverError
from grid_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Send key presses or directions, receive the board after each move."""
    manager = _get_manager(websocket)
    game = manager.get_game(game_id)
    if game is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    game.connections.append(websocket)
    logger.info("Client connected to game %s.", game_id)

    # Send initial state snapshot so the client can paint immediately.
    await websocket.send_text(
        json.dumps(game.get_state(), separators=(",", ":")),
    )

    try:
        # The manager closes sockets of games it prunes.
        while websocket.application_state == WebSocketState.CONNECTED:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            if msg.get("action") == "restart":
                await manager.restart(game_id)
                continue

            token = msg.get("key")
            if not isinstance(token, str):
                token = msg.get("direction")
            if not isinstance(token, str):
                continue
            direction = parse_direction(token)
            if direction is None:
                continue

            try:
                await manager.move(game_id, direction)
            except GameOverError:
                continue
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    except KeyError:
        logger.info("Game %s went away during play.", game_id)
        if websocket.application_state == WebSocketState.CONNECTED:
            await websocket.close(code=4004, reason="Game not found.")
    finally:
        if websocket in game.connections:
            game.connections.remove(websocket)
