"""
Tests for the leaderboard ordering, truncation and name normalization.
"""

from itertools import count
from unittest import TestCase, main

from tilemerge.addons.types import LeaderboardEntry
from tilemerge.core.leaderboard import Leaderboard


class TestLeaderboard(TestCase):
    """Test recording and ranking scores."""

    def setUp(self):
        """Clock ticking one second per call."""
        self.clock = count(1_700_000_000).__next__
        self.board = Leaderboard(capacity=10, clock=self.clock)

    def test_name_normalization(self):
        """Names are trimmed and empty names get the default."""
        self.assertEqual(self.board.record("  Ada  ", 10), "Ada")
        self.assertEqual(self.board.record("   ", 20), "Anonymous")
        self.assertEqual(self.board.record(None, 30), "Anonymous")
        self.assertEqual([entry.name for entry in self.board.entries], ["Anonymous", "Anonymous", "Ada"])

    def test_keeps_top_ten(self):
        """After 11 scores, the lowest one is dropped."""
        for score in (50, 10, 80, 30, 90, 20, 70, 100, 40, 60, 110):
            self.board.record("player", score)

        scores = [entry.score for entry in self.board.entries]
        self.assertEqual(len(scores), 10)
        self.assertEqual(scores, [110, 100, 90, 80, 70, 60, 50, 40, 30, 20])
        self.assertEqual(self.board.top_score, 110)

    def test_ties_newer_first(self):
        """Equal scores are ordered by most recent timestamp."""
        self.board.record("old", 100)
        self.board.record("new", 100)
        self.assertEqual([entry.name for entry in self.board.entries], ["new", "old"])

    def test_oldest_tie_dropped(self):
        """When all scores tie, the oldest entry is the one dropped."""
        for i in range(11):
            self.board.record(f"p{i}", 50)

        names = [entry.name for entry in self.board.entries]
        self.assertEqual(len(names), 10)
        self.assertNotIn("p0", names)
        self.assertEqual(names[0], "p10")

    def test_same_timestamp_new_entry_first(self):
        """A full tie puts the newly recorded entry first."""
        board = Leaderboard(clock=lambda: 1_700_000_000.0)
        board.record("first", 10)
        board.record("second", 10)
        self.assertEqual(board.entries[0].name, "second")

    def test_entry_fields(self):
        """Entries carry a date string and a millisecond timestamp."""
        board = Leaderboard(clock=lambda: 1_700_000_000.5)
        board.record("Ada", 42)
        entry = board.entries[0]
        self.assertEqual(entry.score, 42)
        self.assertEqual(entry.timestamp, 1_700_000_000_500)
        self.assertRegex(entry.date, r"^\d{4}-\d{2}-\d{2}$")

    def test_loaded_entries_are_ranked(self):
        """Entries given at construction are sorted and truncated."""
        entries = [LeaderboardEntry(name=str(i), score=i, date="2024-01-01", timestamp=i) for i in range(15)]
        board = Leaderboard(capacity=10, entries=entries)
        self.assertEqual([entry.score for entry in board.entries], list(range(14, 4, -1)))

    def test_clear(self):
        """Clearing removes every entry."""
        self.board.record("Ada", 10)
        self.board.clear()
        self.assertEqual(len(self.board), 0)
        self.assertIsNone(self.board.top_score)


if __name__ == "__main__":
    main()
