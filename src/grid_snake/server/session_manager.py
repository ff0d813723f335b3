"""In-memory registry of game sessions and their connected sockets."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.direction import Direction
from grid_snake.engine import GameSession
from grid_snake.errors import GameOverError
from grid_snake.server.models import GameSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_GAMES = 100


@dataclass
class GameInstance:
    """A registered session plus the sockets watching it."""

    game_id: str
    session: GameSession
    connections: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def config(self) -> GameConfig:
        return self.session.config

    def summary(self) -> GameSummary:
        game = self.session.game
        return GameSummary(
            game_id=self.game_id,
            status=game.status,
            length=game.length,
            width=game.board.width,
            height=game.board.height,
        )

    def get_state(self) -> dict:
        state = self.session.get_state()
        state["game_id"] = self.game_id
        return state


class SessionManager:
    """Central registry owning every game session."""

    def __init__(self, max_finished_games: int = _MAX_FINISHED_GAMES) -> None:
        if max_finished_games < 0:
            raise ValueError("max_finished_games must be >= 0.")
        self._games: dict[str, GameInstance] = {}
        self._max_finished_games = max_finished_games

    def create_game(
        self,
        width: int = 10,
        height: int | None = None,
        seed: int | None = None,
    ) -> GameInstance:
        """Start a new session and return its instance."""
        config = GameConfig(width=width, height=height, seed=seed)
        game_id = uuid.uuid4().hex[:12]
        instance = GameInstance(game_id=game_id, session=GameSession(config))
        self._games[game_id] = instance
        logger.info(
            "Game %s created (%dx%d).",
            game_id, config.width, config.effective_height,
        )
        return instance

    def get_game(self, game_id: str) -> GameInstance | None:
        return self._games.get(game_id)

    def _require(self, game_id: str) -> GameInstance:
        game = self._games.get(game_id)
        if game is None:
            raise KeyError(f"Game {game_id} not found.")
        return game

    def list_games(self) -> list[GameSummary]:
        """Return summaries of games still running."""
        return [
            g.summary() for g in self._games.values()
            if not g.session.game_over
        ]

    async def move(self, game_id: str, direction: Direction) -> dict:
        """Apply one move and broadcast the resulting state.

        Moves on the same game are serialized by its lock, and the
        broadcast happens while the lock is held, so every socket sees the
        snapshots in the order the moves were applied.

        Raises:
            KeyError: the game does not exist.
            GameOverError: the game has already ended.
        """
        game = self._require(game_id)
        async with game.lock:
            if game.session.game_over:
                raise GameOverError(
                    f"Game {game_id} is already {game.session.game.status.value}.",
                )
            state = game.session.move(direction)
            state["game_id"] = game_id
            await self._broadcast(game, state)
            if game.session.game_over and game.finished_at is None:
                game.finished_at = time.monotonic()
                await self._prune_finished_games()
        return state

    async def restart(self, game_id: str) -> dict:
        """Replace the game's state with a fresh one and broadcast it."""
        game = self._require(game_id)
        async with game.lock:
            game.session.restart()
            game.finished_at = None
            state = game.get_state()
            await self._broadcast(game, state)
        logger.info("Game %s restarted.", game_id)
        return state

    async def delete_game(self, game_id: str) -> None:
        game = self._games.pop(game_id, None)
        if game is None:
            raise KeyError(f"Game {game_id} not found.")
        await self._close_connections(game)
        logger.info("Game %s deleted.", game_id)

    async def _prune_finished_games(self) -> None:
        """Drop the oldest finished games beyond the retention limit.

        Sockets still attached to a dropped game are closed.
        """
        finished = [
            g for g in self._games.values() if g.finished_at is not None
        ]
        overflow = len(finished) - self._max_finished_games
        if overflow <= 0:
            return

        finished.sort(key=lambda g: g.finished_at)
        for stale in finished[:overflow]:
            self._games.pop(stale.game_id, None)
            await self._close_connections(stale)
        logger.info(
            "Pruned %d finished games (retaining up to %d).",
            overflow, self._max_finished_games,
        )

    async def _broadcast(self, game: GameInstance, state: dict) -> None:
        """Send game state to every socket attached to the game."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        for ws in list(game.connections):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                logger.warning("Failed sending state for game %s.", game.game_id)
                dead.append(ws)

        for ws in dead:
            if ws in game.connections:
                game.connections.remove(ws)

    async def _close_connections(self, game: GameInstance) -> None:
        for ws in list(game.connections):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game removed.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", game.game_id)
        game.connections.clear()

    async def cleanup(self) -> None:
        """Close every socket and forget all games."""
        for game in list(self._games.values()):
            await self._close_connections(game)
        self._games.clear()
        logger.info("SessionManager cleanup complete.")
