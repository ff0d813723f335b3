"""Text and cell-class views of a board for display surfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from grid_snake.board import TARGET

if TYPE_CHECKING:
    from grid_snake.board import Board

_SYMBOLS = {"target": "*", "snake": "#", "empty": " "}


def cell_class(value: int) -> str:
    """Return the display class for a single cell value."""
    if value == TARGET:
        return "target"
    if value > 0:
        return "snake"
    return "empty"


def cell_classes(board: Board) -> list[list[str]]:
    """Return the display class of every cell, row by row."""
    return [[cell_class(v) for v in row] for row in board.cells.tolist()]


def render_text(board: Board) -> str:
    """Draw the board as text: ``*`` target, ``#`` snake, space empty."""
    return "\n".join(
        "".join(_SYMBOLS[c] for c in row) for row in cell_classes(board)
    )
