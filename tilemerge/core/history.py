# -*- coding: utf-8 -*-
"""
Bounded history of game snapshots used to undo moves.
"""
from collections import deque
from typing import Iterator, Optional

from tilemerge.addons.types import HistoryEntry


class History:
    """
    Stack of snapshots with a fixed capacity.

    Snapshots are pushed before each accepted move and popped most-recent-first by undo.
    Once the capacity is reached, pushing evicts the oldest snapshot.
    """

    def __init__(self, capacity: int = 10):
        """
        Initialize the history.

        Parameters
        ----------
        capacity : int
            Maximum number of snapshots kept.
        """
        self.capacity = capacity
        self.buffer: deque[HistoryEntry] = deque(maxlen=capacity)

    def push(self, entry: HistoryEntry) -> None:
        """
        Add a snapshot, evicting the oldest one when full.

        Parameters
        ----------
        entry : HistoryEntry
            Snapshot to store. The grid is copied so later moves cannot alter it.
        """
        self.buffer.append(HistoryEntry(grid=entry.grid.copy(), score=entry.score))

    def pop(self) -> Optional[HistoryEntry]:
        """
        Remove and return the most recent snapshot.

        Returns
        -------
        Optional[HistoryEntry]
            The snapshot, or None when there is nothing to undo.
        """
        if not self.buffer:
            return None
        return self.buffer.pop()

    def clear(self) -> None:
        """Drop every snapshot."""
        self.buffer.clear()

    def entries(self) -> list[HistoryEntry]:
        """Snapshots from oldest to newest."""
        return list(self.buffer)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.buffer)

    def __len__(self) -> int:
        """Return the number of snapshots."""
        return len(self.buffer)
