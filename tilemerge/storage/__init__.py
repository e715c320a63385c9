# -*- coding: utf-8 -*-
"""
Persistence of game sessions: key-value stores and the persisted data shape.
"""

from .state import SavedGame, SessionStorage, decode_best_score, decode_game, decode_leaderboard, encode_game
from .store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SavedGame",
    "SessionStorage",
    "decode_best_score",
    "decode_game",
    "decode_leaderboard",
    "encode_game",
]
