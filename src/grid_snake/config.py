"""Game session configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.placement import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board size and randomness settings for one game session.

    Supports JSON serialization for reproducible games.
    """

    width: int = 10
    height: int | None = None
    seed: int | None = None
    max_placement_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.width < 1 or self.effective_height < 1:
            raise ValueError("width and height must each be at least 1.")
        if self.width * self.effective_height < 2:
            raise ValueError("Board needs at least 2 cells.")
        if self.max_placement_attempts < 0:
            raise ValueError("max_placement_attempts must be >= 0.")

    @property
    def effective_height(self) -> int:
        if self.height is not None:
            return self.height
        return self.width

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls(**json.loads(Path(path).read_text()))
