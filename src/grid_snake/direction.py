"""Movement directions and the input tokens bound to them."""

from __future__ import annotations

import enum


class Direction(enum.Enum):
    """Cardinal directions with (row_delta, col_delta) values."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    def offset(self, row: int, col: int) -> tuple[int, int]:
        """Return the coordinate one cell away in this direction."""
        dr, dc = self.value
        return row + dr, col + dc


# Browser ``KeyboardEvent.key`` names.
KEY_BINDINGS: dict[str, Direction] = {
    "ArrowUp": Direction.NORTH,
    "ArrowDown": Direction.SOUTH,
    "ArrowRight": Direction.EAST,
    "ArrowLeft": Direction.WEST,
}

_NAMES: dict[str, Direction] = {
    **{d.name.lower(): d for d in Direction},
    **{d.name[0].lower(): d for d in Direction},
}


def parse_direction(token: str) -> Direction | None:
    """Map a key name or direction name to a Direction.

    Returns ``None`` for anything unrecognised so callers can ignore it.
    """
    if token in KEY_BINDINGS:
        return KEY_BINDINGS[token]
    return _NAMES.get(token.strip().lower())
