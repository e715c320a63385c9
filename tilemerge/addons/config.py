# -*- coding: utf-8 -*-
"""
Configuration of a game session.
"""
from dataclasses import dataclass, field


@dataclass
class StorageKeys:
    """
    Names under which the session persists its data.
    """

    game_state: str = 'game_state'
    best_score: str = 'best_score'
    leaderboard: str = 'leaderboard'


@dataclass
class GameConfig:
    """
    Game configuration.

    Attributes
    ----------
    size : int
        Side of the square grid.
    history_size : int
        Number of moves that can be undone.
    leaderboard_size : int
        Number of scores kept in the leaderboard.
    tile_probs : dict[int, float]
        Value of a spawned tile and its probability.
    start_tiles : int
        Number of tiles placed on a new grid.
    default_name : str
        Name recorded in the leaderboard when the player gives none.
    storage_keys : StorageKeys
        Keys used to persist the session.
    """

    size: int = 4
    history_size: int = 10
    leaderboard_size: int = 10
    tile_probs: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})
    start_tiles: int = 2
    default_name: str = 'Anonymous'
    storage_keys: StorageKeys = field(default_factory=StorageKeys)

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if self.history_size < 1:
            raise ValueError(f'history_size must be >= 1, got {self.history_size}')
        if self.leaderboard_size < 1:
            raise ValueError(f'leaderboard_size must be >= 1, got {self.leaderboard_size}')
        if not 0 <= self.start_tiles <= self.size**2:
            raise ValueError(f'start_tiles must fit in the grid, got {self.start_tiles}')
        if abs(sum(self.tile_probs.values()) - 1.0) > 1e-9:
            raise ValueError(f'tile probabilities must sum to 1, got {self.tile_probs}')
