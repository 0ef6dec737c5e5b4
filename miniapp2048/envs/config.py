"""
Configuration for a game session.
"""

from dataclasses import dataclass, field
from math import isclose
from pathlib import Path

from miniapp2048.core.gameboard import TILE_SPAWN_PROBS, WIN_TILE
from miniapp2048.core.gamemove import SWIPE_MIN_DISTANCE


def _default_best_score_path() -> Path:
    return Path.home() / '.miniapp2048' / 'best_score.json'


@dataclass
class GameConfig:
    """
    Configuration for a game session.

    Raises
    ------
    ValueError
        If the board is smaller than 2x2 or the spawn probabilities do not sum to 1.
    """

    # ##>: Board parameters.
    size: int = 4  # Width and height of the grid
    win_tile: int = WIN_TILE  # Tile that triggers the "You win!" banner
    initial_tiles: int = 2  # Tiles spawned by a new game
    tile_spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))

    # ##>: Input and display.
    swipe_min_distance: float = SWIPE_MIN_DISTANCE  # Pixels before a drag counts as a swipe
    status_timeout: float = 3.0  # Seconds a share status stays visible

    # ##>: Host integration.
    share_url: str = 'https://warpcast.com/~/developers/mini-apps'
    best_score_path: Path = field(default_factory=_default_best_score_path)

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be at least 2, got {self.size}')
        if not isclose(sum(self.tile_spawn_probs.values()), 1.0):
            raise ValueError(f'tile_spawn_probs must sum to 1, got {self.tile_spawn_probs}')
        self.best_score_path = Path(self.best_score_path).expanduser()
