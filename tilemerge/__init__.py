"""Sliding-tile merge puzzle: grid transitions, undo history, leaderboard and persistence."""

from .addons import GameConfig, MoveResult
from .core import Direction, apply_move, is_done, merge_line, spawn_tile
from .envs import GameSession

__all__ = ["GameConfig", "GameSession", "Direction", "MoveResult", "apply_move", "is_done", "merge_line", "spawn_tile"]
