# -*- coding: utf-8 -*-
"""
This module provides the board engine of the 2048 game.

It includes functions for collapsing rows, orienting the board for each direction, applying moves,
spawning tiles, detecting the win and game-over conditions, and mapping user input onto directions.
"""

from .gameboard import (
    ORIENTATIONS,
    TILE_SPAWN_PROBS,
    WIN_TILE,
    MoveResult,
    apply_move,
    as_board,
    check_game_over,
    check_win,
    collapse_row,
    deorient,
    highest_tile,
    legal_directions,
    new_board,
    orient,
    spawn_tile,
)
from .gamemove import (
    KEY_BINDINGS,
    Direction,
    direction_from_key,
    direction_from_swipe,
)

__all__ = [
    "Direction",
    "MoveResult",
    "ORIENTATIONS",
    "TILE_SPAWN_PROBS",
    "WIN_TILE",
    "KEY_BINDINGS",
    "apply_move",
    "as_board",
    "check_game_over",
    "check_win",
    "collapse_row",
    "deorient",
    "direction_from_key",
    "direction_from_swipe",
    "highest_tile",
    "legal_directions",
    "new_board",
    "orient",
    "spawn_tile",
]
