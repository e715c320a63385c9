# -*- coding: utf-8 -*-
"""
Core rules of the sliding-tile merge puzzle.

It includes the line merge, whole-grid moves, tile spawning, end-of-game detection,
the undo history and the leaderboard.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    apply_move,
    fill_cells,
    is_done,
    is_valid_grid,
    legal_moves,
    merge_line,
    new_grid,
    next_state,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import Direction
from .history import History
from .leaderboard import Leaderboard

__all__ = [
    "TILE_SPAWN_PROBS",
    "Direction",
    "History",
    "Leaderboard",
    "apply_move",
    "fill_cells",
    "is_done",
    "is_valid_grid",
    "legal_moves",
    "merge_line",
    "new_grid",
    "next_state",
    "slide_and_merge",
    "spawn_tile",
]
