"""
Tests for the key-value stores and the persisted data shape.
"""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase, main

import numpy as np

from tilemerge.addons.types import HistoryEntry
from tilemerge.storage.state import decode_best_score, decode_game, decode_leaderboard, encode_game
from tilemerge.storage.store import JsonFileStore, MemoryStore


def _grid(*cells: tuple[int, int, int]) -> np.ndarray:
    grid = np.zeros((4, 4), dtype=np.int64)
    for row, col, value in cells:
        grid[row, col] = value
    return grid


class TestGameState(TestCase):
    """Test encoding and decoding of a game."""

    def test_round_trip(self):
        """A decoded game equals the encoded one."""
        grid = _grid((0, 0, 4), (3, 3, 2))
        history = [HistoryEntry(grid=_grid((0, 0, 2), (0, 1, 2)), score=0)]

        saved = decode_game(encode_game(grid, 4, history))

        np.testing.assert_array_equal(saved.grid, grid)
        self.assertEqual(saved.score, 4)
        self.assertEqual(len(saved.history), 1)
        np.testing.assert_array_equal(saved.history[0].grid, history[0].grid)
        self.assertEqual(saved.history[0].score, 0)

    def test_shape(self):
        """The encoded game has grid, score and history keys."""
        data = json.loads(encode_game(_grid((1, 1, 8)), 12, []))
        self.assertEqual(set(data), {"grid", "score", "history"})
        self.assertEqual(data["grid"][1], [0, 8, 0, 0])

    def test_missing(self):
        """Nothing stored gives an empty grid."""
        saved = decode_game(None)
        self.assertFalse(saved.grid.any())
        self.assertEqual(saved.score, 0)
        self.assertEqual(saved.history, [])

    def test_corrupted(self):
        """Malformed data falls back to defaults without raising."""
        bad_states = [
            "not json",
            "[]",
            json.dumps({"grid": [[0, 3, 0, 0]] * 4, "score": 0}),
            json.dumps({"grid": [[0, 0, 0]] * 3, "score": 0}),
            json.dumps({"grid": [[0, 2.5, 0, 0]] * 4, "score": 0}),
            json.dumps({"grid": [[0, True, 0, 0]] * 4, "score": 0}),
            json.dumps({"grid": [[0, 2, 0, 0]] * 4, "score": -1}),
            json.dumps({"grid": [[0, 2, 0, 0]] * 4, "score": 0, "history": "nope"}),
            json.dumps({"grid": [[0, 2, 0, 0]] * 4, "score": 0, "history": [{"score": 0}]}),
            json.dumps({"score": 10}),
            json.dumps({"grid": [[2**64, 0, 0, 0]] + [[0, 0, 0, 0]] * 3, "score": 0}),
            json.dumps(
                {"grid": [[2, 0, 0, 0]] * 4, "score": 0, "history": [{"grid": [[-(2**70), 0, 0, 0]] * 4, "score": 0}]}
            ),
        ]
        for raw in bad_states:
            saved = decode_game(raw)
            self.assertFalse(saved.grid.any(), raw)
            self.assertEqual(saved.score, 0)
            self.assertEqual(saved.history, [])

    def test_tile_beyond_int64(self):
        """A tile too large for the grid dtype is rejected, not converted."""
        raw = json.dumps({"grid": [[2**64, 0, 0, 0]] + [[0, 0, 0, 0]] * 3, "score": 0})
        with self.assertLogs("tilemerge.storage.state", level="WARNING"):
            saved = decode_game(raw)
        self.assertFalse(saved.grid.any())

        # ##>: The largest tile that fits is still accepted.
        raw = json.dumps({"grid": [[2**62, 0, 0, 0]] + [[0, 0, 0, 0]] * 3, "score": 0})
        self.assertEqual(int(decode_game(raw).grid[0, 0]), 2**62)

    def test_history_trimmed(self):
        """Only the most recent snapshots are kept."""
        history = [HistoryEntry(grid=_grid((0, 0, 2)), score=score) for score in range(12)]
        saved = decode_game(encode_game(_grid((0, 0, 2)), 0, history), history_size=10)
        self.assertEqual([entry.score for entry in saved.history], list(range(2, 12)))


class TestBestScoreAndLeaderboard(TestCase):
    """Test decoding of the best score and the leaderboard."""

    def test_best_score(self):
        self.assertEqual(decode_best_score("128"), 128)
        self.assertEqual(decode_best_score(None), 0)
        self.assertEqual(decode_best_score("abc"), 0)
        self.assertEqual(decode_best_score("-5"), 0)

    def test_leaderboard_skips_malformed_entries(self):
        """Valid entries survive next to malformed ones."""
        raw = json.dumps(
            [
                {"name": "Ada", "score": 100, "date": "2024-01-01", "timestamp": 1},
                {"name": "Bob"},
                "garbage",
                {"name": "Eve", "score": "high", "date": "2024-01-01", "timestamp": 2},
            ]
        )
        entries = decode_leaderboard(raw)
        self.assertEqual([entry.name for entry in entries], ["Ada"])

    def test_leaderboard_corrupted(self):
        self.assertEqual(decode_leaderboard("{oops"), [])
        self.assertEqual(decode_leaderboard('{"name": "Ada"}'), [])
        self.assertEqual(decode_leaderboard(None), [])


class TestStores(TestCase):
    """Test the key-value stores."""

    def test_memory_store(self):
        store = MemoryStore()
        store.set("key", "value")
        self.assertEqual(store.get("key"), "value")
        store.delete("key")
        store.delete("key")
        self.assertIsNone(store.get("key"))

    def test_json_file_store_persists(self):
        """Values survive a new store on the same file."""
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "state.json"
            store = JsonFileStore(path)
            store.set("best_score", "64")
            store.set("other", "x")
            store.delete("other")

            reopened = JsonFileStore(path)
            self.assertEqual(reopened.get("best_score"), "64")
            self.assertIsNone(reopened.get("other"))

    def test_json_file_store_corrupted(self):
        """An unreadable file is treated as empty."""
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            path.write_text("{broken", encoding="utf-8")
            store = JsonFileStore(path)
            self.assertIsNone(store.get("game_state"))

            path.write_text("[1, 2]", encoding="utf-8")
            self.assertIsNone(JsonFileStore(path).get("game_state"))


if __name__ == "__main__":
    main()
