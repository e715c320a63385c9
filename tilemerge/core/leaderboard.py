# -*- coding: utf-8 -*-
"""
Local leaderboard of saved scores.
"""
import time
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Optional

from tilemerge.addons.types import LeaderboardEntry


class Leaderboard:
    """
    Best scores ordered by score, then by most recent timestamp.

    Entries are never modified once recorded; they leave the board only when they
    fall below the capacity or when the board is cleared.
    """

    def __init__(
        self,
        capacity: int = 10,
        default_name: str = 'Anonymous',
        entries: Iterable[LeaderboardEntry] = (),
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the leaderboard.

        Parameters
        ----------
        capacity : int
            Maximum number of entries kept.
        default_name : str
            Name used when a score is recorded without one.
        entries : Iterable[LeaderboardEntry]
            Previously saved entries.
        clock : Callable[[], float]
            Returns the current time in seconds since the epoch.
        """
        self.capacity = capacity
        self.default_name = default_name
        self._clock = clock
        self._entries: list[LeaderboardEntry] = []
        self._rank(list(entries))

    @property
    def entries(self) -> tuple[LeaderboardEntry, ...]:
        """Entries from best to worst."""
        return tuple(self._entries)

    @property
    def top_score(self) -> Optional[int]:
        """Best recorded score, None when the board is empty."""
        return self._entries[0].score if self._entries else None

    def normalize_name(self, name: Optional[str]) -> str:
        """Trim a player name, falling back to the default name when nothing is left."""
        name = (name or '').strip()
        return name or self.default_name

    def record(self, name: Optional[str], score: int) -> str:
        """
        Record a score.

        Parameters
        ----------
        name : Optional[str]
            Player name, trimmed; empty names become the default name.
        score : int
            Score to record.

        Returns
        -------
        str
            The name under which the score was recorded.
        """
        name = self.normalize_name(name)
        now = self._clock()
        entry = LeaderboardEntry(
            name=name,
            score=int(score),
            date=datetime.fromtimestamp(now).date().isoformat(),
            timestamp=int(now * 1000),
        )

        # ##>: The new entry goes first so it wins a tie on both score and timestamp.
        self._rank([entry, *self._entries])
        return name

    def clear(self) -> None:
        """Remove every entry."""
        self._entries = []

    def _rank(self, entries: list[LeaderboardEntry]) -> None:
        entries.sort(key=lambda entry: (-entry.score, -entry.timestamp))
        self._entries = entries[: self.capacity]

    def __len__(self) -> int:
        return len(self._entries)
