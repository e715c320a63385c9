# -*- coding: utf-8 -*-
"""
Persisted shape of a game session.

Three keys are stored as JSON strings:

- ``game_state``: ``{"grid": [[int]], "score": int, "history": [{"grid": [[int]], "score": int}]}``
- ``best_score``: an integer string
- ``leaderboard``: ``[{"name": str, "score": int, "date": str, "timestamp": int}]``

Loading never raises: missing or malformed data falls back to defaults.
"""
from __future__ import annotations

import json
import logging
from typing import Any, NamedTuple

from numpy import array, int64, ndarray

from tilemerge.addons.config import GameConfig
from tilemerge.addons.types import HistoryEntry, LeaderboardEntry
from tilemerge.core.gameboard import is_valid_grid, new_grid
from tilemerge.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

# ##>: Largest tile a grid cell can hold without overflowing int64.
MAX_TILE = 2**62


class SavedGame(NamedTuple):
    """Game restored from storage."""

    grid: ndarray
    score: int
    history: list[HistoryEntry]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_score(value: Any) -> int:
    if not _is_int(value) or value < 0:
        raise ValueError(f'invalid score: {value!r}')
    return value


def _parse_grid(value: Any, size: int) -> ndarray:
    if not isinstance(value, list) or not all(isinstance(row, list) for row in value):
        raise ValueError('grid must be a list of rows')
    if not all(_is_int(cell) for row in value for cell in row):
        raise ValueError('grid cells must be integers')
    if any(len(row) != size for row in value):
        raise ValueError(f'grid must be {size}x{size}')
    if any(not 0 <= cell <= MAX_TILE for row in value for cell in row):
        raise ValueError(f'grid cells must be between 0 and {MAX_TILE}')

    grid = array(value, dtype=int64).reshape(len(value), size)
    if not is_valid_grid(grid, size):
        raise ValueError('grid must be square and hold powers of two')
    return grid


def _grid_to_list(grid: ndarray) -> list[list[int]]:
    return [[int(cell) for cell in row] for row in grid]


def encode_game(grid: ndarray, score: int, history: list[HistoryEntry]) -> str:
    """Serialize a game and its undo history."""
    return json.dumps(
        {
            'grid': _grid_to_list(grid),
            'score': int(score),
            'history': [{'grid': _grid_to_list(entry.grid), 'score': int(entry.score)} for entry in history],
        }
    )


def decode_game(raw: str | None, size: int = 4, history_size: int = 10) -> SavedGame:
    """
    Restore a game serialized by ``encode_game``.

    Parameters
    ----------
    raw : str | None
        Serialized game, None when nothing was stored.
    size : int
        Expected grid side.
    history_size : int
        Number of snapshots kept; older ones are dropped.

    Returns
    -------
    SavedGame
        The restored game, or an empty grid with score 0 and no history when the data
        is missing or malformed.
    """
    empty = SavedGame(grid=new_grid(size), score=0, history=[])
    if raw is None:
        return empty

    try:
        state = json.loads(raw)
        if not isinstance(state, dict):
            raise ValueError('game state must be an object')

        grid = _parse_grid(state.get('grid'), size)
        score = _parse_score(state.get('score', 0))

        history_data = state.get('history', [])
        if not isinstance(history_data, list):
            raise ValueError('history must be a list')
        history = [
            HistoryEntry(grid=_parse_grid(item['grid'], size), score=_parse_score(item['score']))
            for item in history_data[-history_size:]
        ]
    except (ValueError, TypeError, KeyError, OverflowError) as error:
        logger.warning('Discarding corrupted game state: %s', error)
        return empty

    return SavedGame(grid=grid, score=score, history=history)


def encode_leaderboard(entries: tuple[LeaderboardEntry, ...] | list[LeaderboardEntry]) -> str:
    """Serialize leaderboard entries."""
    return json.dumps(
        [
            {'name': entry.name, 'score': entry.score, 'date': entry.date, 'timestamp': entry.timestamp}
            for entry in entries
        ]
    )


def decode_leaderboard(raw: str | None) -> list[LeaderboardEntry]:
    """
    Restore leaderboard entries, skipping malformed ones.

    The result is not re-ranked; ``Leaderboard`` sorts and truncates on construction.
    """
    if raw is None:
        return []

    try:
        data = json.loads(raw)
    except ValueError as error:
        logger.warning('Discarding corrupted leaderboard: %s', error)
        return []
    if not isinstance(data, list):
        logger.warning('Discarding corrupted leaderboard: expected a list')
        return []

    entries = []
    for item in data:
        try:
            entry = LeaderboardEntry(
                name=str(item['name']),
                score=_parse_score(item['score']),
                date=str(item.get('date', '')),
                timestamp=_parse_score(item.get('timestamp', 0)),
            )
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.warning('Skipping malformed leaderboard entry: %r', item)
            continue
        entries.append(entry)
    return entries


def decode_best_score(raw: str | None) -> int:
    """Parse the stored best score, 0 when missing or malformed."""
    if raw is None:
        return 0
    try:
        return max(int(raw), 0)
    except ValueError:
        logger.warning('Discarding corrupted best score: %r', raw)
        return 0


class SessionStorage:
    """
    Reads and writes the persisted data of a session through a key-value store.
    """

    def __init__(self, store: KeyValueStore, config: GameConfig):
        self.store = store
        self.config = config
        self.keys = config.storage_keys

    def load_game(self) -> SavedGame:
        return decode_game(
            self.store.get(self.keys.game_state), size=self.config.size, history_size=self.config.history_size
        )

    def save_game(self, grid: ndarray, score: int, history: list[HistoryEntry]) -> None:
        self.store.set(self.keys.game_state, encode_game(grid, score, history))

    def load_best_score(self) -> int:
        return decode_best_score(self.store.get(self.keys.best_score))

    def save_best_score(self, best_score: int) -> None:
        self.store.set(self.keys.best_score, str(int(best_score)))

    def load_leaderboard(self) -> list[LeaderboardEntry]:
        return decode_leaderboard(self.store.get(self.keys.leaderboard))

    def save_leaderboard(self, entries: tuple[LeaderboardEntry, ...] | list[LeaderboardEntry]) -> None:
        self.store.set(self.keys.leaderboard, encode_leaderboard(entries))
