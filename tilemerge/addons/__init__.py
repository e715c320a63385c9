"""Configuration and value types shared by the game modules."""
from .config import GameConfig, StorageKeys
from .types import HistoryEntry, LeaderboardEntry, MoveResult

__all__ = ["GameConfig", "StorageKeys", "HistoryEntry", "LeaderboardEntry", "MoveResult"]
