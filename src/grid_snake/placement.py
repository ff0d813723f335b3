"""Random empty-cell placement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.errors import BoardFullError

if TYPE_CHECKING:
    from grid_snake.board import Board

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 64


def place_randomly(
    board: Board,
    value: int,
    rng: np.random.Generator | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> tuple[int, int]:
    """Overwrite a random empty cell with *value* and return its coordinate.

    Rows and columns are sampled independently and rejected until an empty
    cell turns up. After *max_attempts* misses the empty cells are listed
    and one is picked uniformly, so a nearly full board still terminates.

    Raises:
        BoardFullError: if the board has no empty cell.
    """
    if max_attempts < 0:
        raise ValueError("max_attempts must be >= 0.")
    if board.is_full():
        raise BoardFullError(
            f"No empty cell on a {board.width}×{board.height} board.",
        )
    rng = rng if rng is not None else np.random.default_rng()

    for _ in range(max_attempts):
        row = int(rng.integers(board.height))
        col = int(rng.integers(board.width))
        if board.get(row, col) == 0:
            board.set(row, col, value)
            return row, col

    empty = board.empty_cells()
    logger.info(
        "Placement fell back to scanning after %d misses (%d empty cells).",
        max_attempts, len(empty),
    )
    row, col = empty[int(rng.integers(len(empty)))]
    board.set(row, col, value)
    return row, col
