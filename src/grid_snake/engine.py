"""Session that owns one game and turns collisions into game over."""

from __future__ import annotations

import logging

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.direction import Direction
from grid_snake.errors import CollisionError
from grid_snake.game import Game, initialize, step
from grid_snake.render import cell_classes, render_text

logger = logging.getLogger(__name__)


class GameSession:
    """Single-player, input-driven game session.

    The session owns the game and its RNG. Each call to :meth:`move`
    applies one direction and returns the updated state dictionary. A
    rejected move ends the game instead of propagating the collision.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.game = self._new_game()

    @property
    def game_over(self) -> bool:
        return not self.game.running

    def move(self, direction: Direction) -> dict:
        """Apply one move. Ignored once the game is over."""
        if self.game_over:
            return self.get_state()

        try:
            step(
                self.game, direction, self.rng,
                self.config.max_placement_attempts,
            )
        except CollisionError as exc:
            self.game.lose(exc.kind)
            logger.info(
                "Snake hit the %s at %s after %d moves (length %d).",
                exc.kind.value, exc.position, self.game.moves,
                self.game.length,
            )
        else:
            logger.debug("Board after %s:\n%s", direction.name,
                         render_text(self.game.board))
        return self.get_state()

    def restart(self) -> dict:
        """Discard the current game and start a fresh one."""
        self.game = self._new_game()
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.game.to_dict()
        state["classes"] = cell_classes(self.game.board)
        return state

    def _new_game(self) -> Game:
        return initialize(
            self.config.width,
            self.config.effective_height,
            rng=self.rng,
            max_attempts=self.config.max_placement_attempts,
        )
