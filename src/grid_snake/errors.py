"""Exceptions raised by the game core."""

from __future__ import annotations

import enum


class CollisionKind(str, enum.Enum):
    """What the head ran into on a rejected move."""

    WALL = "wall"
    TAIL = "tail"


class SnakeError(Exception):
    """Base class for all game errors."""


class CollisionError(SnakeError):
    """A move was rejected because the head would collide.

    The game state is left exactly as it was before the move.
    """

    kind: CollisionKind

    def __init__(self, row: int, col: int) -> None:
        self.position = (row, col)
        super().__init__(
            f"Would hit {self.kind.value} at ({row}, {col}).",
        )


class WallCollision(CollisionError):
    kind = CollisionKind.WALL


class TailCollision(CollisionError):
    kind = CollisionKind.TAIL


class GameOverError(SnakeError):
    """A move was requested on a game that has already ended."""


class BoardFullError(SnakeError):
    """No empty cell is left to place a value into."""
