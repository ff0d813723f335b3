"""Game state and the single-move transition function."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from grid_snake.board import TARGET, Board
from grid_snake.direction import Direction
from grid_snake.errors import (
    CollisionKind,
    GameOverError,
    TailCollision,
    WallCollision,
)
from grid_snake.placement import DEFAULT_MAX_ATTEMPTS, place_randomly

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states for a single game."""

    RUNNING = "running"
    LOST = "lost"
    WON = "won"


@dataclass
class Game:
    """A board plus the snake length stored in its head cell.

    ``length`` counts the live segments, head included. The head is the one
    cell whose value equals ``length``.
    """

    board: Board
    length: int = 1
    status: GameStatus = GameStatus.RUNNING
    collision: CollisionKind | None = None
    moves: int = 0

    @property
    def running(self) -> bool:
        return self.status == GameStatus.RUNNING

    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        found = self.board.find(self.length)
        if not found:
            raise ValueError(f"No cell holds the head value {self.length}.")
        return found[0]

    def target(self) -> tuple[int, int] | None:
        """Return the target coordinate, or ``None`` if there is none."""
        found = self.board.find(TARGET)
        return found[0] if found else None

    def lose(self, kind: CollisionKind) -> None:
        """Mark the game as lost to the given collision."""
        self.status = GameStatus.LOST
        self.collision = kind

    def copy(self) -> Game:
        return Game(
            board=self.board.copy(),
            length=self.length,
            status=self.status,
            collision=self.collision,
            moves=self.moves,
        )

    def to_dict(self) -> dict:
        """Serialize game state to a dictionary."""
        target = self.target()
        return {
            "status": self.status.value,
            "length": self.length,
            "moves": self.moves,
            "collision": self.collision.value if self.collision else None,
            "head": list(self.head()),
            "target": list(target) if target is not None else None,
            "board": self.board.to_dict(),
        }


def initialize(
    width: int,
    height: int | None = None,
    rng: np.random.Generator | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Game:
    """Create a fresh game on an empty *height* × *width* board.

    One segment of value 1 and one target are placed on random, distinct
    empty cells. *height* defaults to *width*.
    """
    if height is None:
        height = width
    board = Board(width=width, height=height)
    if width * height < 2:
        raise ValueError("Board needs at least 2 cells for a snake and a target.")
    rng = rng if rng is not None else np.random.default_rng()

    game = Game(board=board)
    place_randomly(board, game.length, rng, max_attempts)
    place_randomly(board, TARGET, rng, max_attempts)
    return game


def step(
    game: Game,
    direction: Direction,
    rng: np.random.Generator | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Game:
    """Advance *game* by one move in *direction* and return it.

    Reaching the target grows the snake by one and skips the tail countdown
    for that move. Any other move counts every segment down by one and
    writes the new head.

    Raises:
        WallCollision: the head would leave the board.
        TailCollision: the head would enter any live segment, including one
            that would clear on this same move.
        GameOverError: the game is no longer running.

    On every error the game is left unchanged.
    """
    if not game.running:
        raise GameOverError(f"Game is already {game.status.value}.")

    board = game.board
    row, col = direction.offset(*game.head())

    if not board.in_bounds(row, col):
        raise WallCollision(row, col)

    value = board.get(row, col)
    if value > 0:
        raise TailCollision(row, col)

    if value == TARGET:
        game.length += 1
        board.set(row, col, game.length)
        game.moves += 1
        if board.is_full():
            game.status = GameStatus.WON
            logger.info("Snake filled the board at length %d.", game.length)
        else:
            place_randomly(board, TARGET, rng, max_attempts)
        return game

    board.decay()
    board.set(row, col, game.length)
    game.moves += 1
    return game
