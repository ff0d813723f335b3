"""Grid Snake — countdown-board snake game core."""

from grid_snake.board import Board
from grid_snake.config import GameConfig
from grid_snake.direction import Direction, parse_direction
from grid_snake.engine import GameSession
from grid_snake.errors import (
    BoardFullError,
    CollisionError,
    CollisionKind,
    GameOverError,
    TailCollision,
    WallCollision,
)
from grid_snake.game import Game, GameStatus, initialize, step

__all__ = [
    "Board",
    "BoardFullError",
    "CollisionError",
    "CollisionKind",
    "Direction",
    "Game",
    "GameConfig",
    "GameOverError",
    "GameSession",
    "GameStatus",
    "TailCollision",
    "WallCollision",
    "initialize",
    "parse_direction",
    "step",
]
