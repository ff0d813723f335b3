"""Tests for the in-memory session registry."""

import asyncio
import json

import pytest
from starlette.websockets import WebSocketState

from grid_snake.board import Board
from grid_snake.direction import Direction
from grid_snake.errors import GameOverError
from grid_snake.game import Game
from grid_snake.server.session_manager import SessionManager


def _doom(manager: SessionManager, game_id: str) -> None:
    """Put the snake against the top wall."""
    board = Board.from_rows([[1, 0], [0, -1]])
    manager.get_game(game_id).session.game = Game(board=board)


class _RecordingSocket:
    """Stand-in socket that records payloads; the first send can lag."""

    def __init__(self, first_send_delay: float = 0.0) -> None:
        self.client_state = WebSocketState.CONNECTED
        self.sent: list[dict] = []
        self.closed_with: int | None = None
        self._delay = first_send_delay

    async def send_text(self, payload: str) -> None:
        if self._delay:
            delay, self._delay = self._delay, 0.0
            await asyncio.sleep(delay)
        self.sent.append(json.loads(payload))

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.closed_with = code
        self.client_state = WebSocketState.DISCONNECTED


class TestSessionManager:
    def test_invalid_retention(self):
        with pytest.raises(ValueError, match=">= 0"):
            SessionManager(max_finished_games=-1)

    def test_create_and_get(self):
        manager = SessionManager()
        game = manager.create_game(width=6, height=4, seed=1)
        assert manager.get_game(game.game_id) is game
        assert game.config.effective_height == 4
        assert manager.get_game("missing") is None

    def test_create_rejects_tiny_board(self):
        with pytest.raises(ValueError):
            SessionManager().create_game(width=1, height=1)

    @pytest.mark.asyncio
    async def test_move_unknown_game(self):
        with pytest.raises(KeyError):
            await SessionManager().move("missing", Direction.NORTH)

    @pytest.mark.asyncio
    async def test_finished_games_leave_listing(self):
        manager = SessionManager()
        game = manager.create_game(width=4, seed=0)
        _doom(manager, game.game_id)
        state = await manager.move(game.game_id, Direction.NORTH)
        assert state["status"] == "lost"
        assert state["game_id"] == game.game_id
        assert manager.list_games() == []
        with pytest.raises(GameOverError):
            await manager.move(game.game_id, Direction.SOUTH)

    @pytest.mark.asyncio
    async def test_prunes_oldest_finished(self):
        manager = SessionManager(max_finished_games=1)
        first = manager.create_game(width=4, seed=0)
        second = manager.create_game(width=4, seed=1)
        for game in (first, second):
            _doom(manager, game.game_id)
            await manager.move(game.game_id, Direction.NORTH)
        assert manager.get_game(first.game_id) is None
        assert manager.get_game(second.game_id) is second

    @pytest.mark.asyncio
    async def test_restart_clears_finished(self):
        manager = SessionManager()
        game = manager.create_game(width=4, seed=0)
        _doom(manager, game.game_id)
        await manager.move(game.game_id, Direction.NORTH)
        state = await manager.restart(game.game_id)
        assert state["status"] == "running"
        assert game.finished_at is None
        assert len(manager.list_games()) == 1

    @pytest.mark.asyncio
    async def test_delete(self):
        manager = SessionManager()
        game = manager.create_game(width=4)
        await manager.delete_game(game.game_id)
        assert manager.get_game(game.game_id) is None
        with pytest.raises(KeyError):
            await manager.delete_game(game.game_id)


class TestBroadcastOrdering:
    @pytest.mark.asyncio
    async def test_slow_socket_sees_moves_in_order(self):
        manager = SessionManager()
        game = manager.create_game(width=3, seed=0)
        board = Board.from_rows([[0, 0, 0], [0, 1, 0], [0, 0, -1]])
        game.session.game = Game(board=board)
        ws = _RecordingSocket(first_send_delay=0.05)
        game.connections.append(ws)

        await asyncio.gather(
            manager.move(game.game_id, Direction.NORTH),
            manager.move(game.game_id, Direction.WEST),
        )

        assert [s["moves"] for s in ws.sent] == [1, 2]
        assert ws.sent[-1]["head"] == [0, 0]

    @pytest.mark.asyncio
    async def test_restart_snapshot_follows_pending_move(self):
        manager = SessionManager()
        game = manager.create_game(width=3, seed=0)
        board = Board.from_rows([[0, 0, 0], [0, 1, 0], [0, 0, -1]])
        game.session.game = Game(board=board)
        ws = _RecordingSocket(first_send_delay=0.05)
        game.connections.append(ws)

        await asyncio.gather(
            manager.move(game.game_id, Direction.NORTH),
            manager.restart(game.game_id),
        )

        assert [s["moves"] for s in ws.sent] == [1, 0]


class TestPruneClosesSockets:
    @pytest.mark.asyncio
    async def test_socket_on_pruned_game_is_closed(self):
        manager = SessionManager(max_finished_games=0)
        game = manager.create_game(width=4, seed=0)
        _doom(manager, game.game_id)
        ws = _RecordingSocket()
        game.connections.append(ws)

        await manager.move(game.game_id, Direction.NORTH)

        assert manager.get_game(game.game_id) is None
        # The losing snapshot is delivered before the socket is closed.
        assert ws.sent[-1]["status"] == "lost"
        assert ws.closed_with == 1000
        assert game.connections == []

    @pytest.mark.asyncio
    async def test_retained_games_keep_sockets(self):
        manager = SessionManager(max_finished_games=1)
        game = manager.create_game(width=4, seed=0)
        _doom(manager, game.game_id)
        ws = _RecordingSocket()
        game.connections.append(ws)

        await manager.move(game.game_id, Direction.NORTH)

        assert manager.get_game(game.game_id) is game
        assert ws.closed_with is None
        assert game.connections == [ws]
