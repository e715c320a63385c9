# -*- coding: utf-8 -*-
"""
Set of types for this project.
"""
from dataclasses import dataclass
from typing import NamedTuple

from numpy import ndarray


class MoveResult(NamedTuple):
    """
    Outcome of applying a direction to a grid.

    Attributes
    ----------
    grid : ndarray
        The grid after sliding and merging (before any tile is spawned).
    points : int
        Sum of the tiles produced by merges during the move.
    changed : bool
        Whether the move was legal, i.e. it scored or moved at least one tile.
    """

    grid: ndarray
    points: int
    changed: bool


@dataclass(frozen=True)
class HistoryEntry:
    """
    Snapshot of the game taken before an accepted move.
    """

    grid: ndarray
    score: int


@dataclass(frozen=True)
class LeaderboardEntry:
    """
    A saved score.
    """

    name: str
    score: int
    date: str
    timestamp: int
