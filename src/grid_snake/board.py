"""Board representation for the snake game."""

from __future__ import annotations

import numpy as np

EMPTY = 0
TARGET = -1


class Board:
    """NumPy-backed grid of countdown cell values.

    ``0`` is empty, ``-1`` is the target, and a positive value is a snake
    segment that clears after that many more moves. Coordinates use
    (row, col) ordering consistent with NumPy indexing.
    """

    def __init__(self, width: int, height: int | None = None) -> None:
        if height is None:
            height = width
        if width < 1 or height < 1:
            raise ValueError("Board dimensions must be at least 1×1.")
        self.width = width
        self.height = height
        self.cells = np.zeros((height, width), dtype=np.int32)

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Board:
        """Build a board from nested row lists, e.g. for a known position."""
        cells = np.asarray(rows, dtype=np.int32)
        if cells.ndim != 2:
            raise ValueError("Board rows must form a rectangle.")
        board = cls(width=cells.shape[1], height=cells.shape[0])
        board.cells[:] = cells
        return board

    @property
    def shape(self) -> tuple[int, int]:
        """Return ``(height, width)``, matching ``cells.shape``."""
        return self.height, self.width

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> int:
        """Return the cell value at the given coordinate as a Python int."""
        return int(self.cells[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Overwrite the cell value at the given coordinate."""
        self.cells[row, col] = value

    def find(self, value: int) -> list[tuple[int, int]]:
        """Return every coordinate holding *value*, in row-major order."""
        rows, cols = np.where(self.cells == value)
        return list(zip(rows.tolist(), cols.tolist(), strict=True))

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return a list of all empty cell coordinates."""
        return self.find(EMPTY)

    def is_full(self) -> bool:
        """Check whether no empty cell remains."""
        return not np.any(self.cells == EMPTY)

    def decay(self) -> None:
        """Count every snake segment down by one move."""
        self.cells[self.cells > 0] -= 1

    def copy(self) -> Board:
        """Return an independent board with the same cells."""
        clone = Board(self.width, self.height)
        clone.cells[:] = self.cells
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(
            self.cells, other.cells,
        )

    def to_dict(self) -> dict:
        """Serialize board state to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": self.cells.tolist(),
        }
