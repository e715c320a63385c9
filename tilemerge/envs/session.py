"""Game session driving the sliding-tile merge puzzle for a front end."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from numpy import ndarray
from numpy.random import PCG64DXSM, default_rng

from tilemerge.addons.config import GameConfig
from tilemerge.addons.types import HistoryEntry, LeaderboardEntry, MoveResult
from tilemerge.core.gameboard import apply_move, fill_cells, is_done, new_grid, spawn_tile
from tilemerge.core.gameboard import legal_moves as grid_legal_moves
from tilemerge.core.gamemove import Direction
from tilemerge.core.history import History
from tilemerge.core.leaderboard import Leaderboard
from tilemerge.storage.state import SessionStorage
from tilemerge.storage.store import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


class GameSession:
    """
    One game of the sliding-tile merge puzzle.

    The session owns the grid, the score, the undo history and the leaderboard, and
    exposes the commands a front end can trigger: ``new_game``, ``move``, ``undo``,
    ``record_score`` and ``clear_leaderboard``. Every state change is persisted and
    reported to the renderer.
    """

    # ##: Key names accepted by ``move``.
    ACTIONS = {direction.name.lower(): direction for direction in Direction}

    def __init__(
        self,
        config: GameConfig | None = None,
        store: KeyValueStore | None = None,
        renderer: Callable[[GameSession], None] | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the session, resuming the stored game when there is one.

        Parameters
        ----------
        config : GameConfig, optional
            Game configuration (default ``GameConfig()``).
        store : KeyValueStore, optional
            Where the session is persisted (default: an in-memory store).
        renderer : Callable[[GameSession], None], optional
            Called with the session after every state change.
        seed : int, optional
            Seed of the tile spawner for reproducible games.
        clock : Callable[[], float]
            Time source for leaderboard timestamps.
        """
        self.config = config if config is not None else GameConfig()
        self.storage = SessionStorage(store if store is not None else MemoryStore(), self.config)
        self._renderer = renderer
        self._rng = default_rng(seed) if seed is not None else default_rng(PCG64DXSM())

        self._grid = new_grid(self.config.size)
        self._score = 0
        self._game_over = False
        self._is_moving = False
        self._history = History(capacity=self.config.history_size)
        self._leaderboard = Leaderboard(
            capacity=self.config.leaderboard_size,
            default_name=self.config.default_name,
            entries=self.storage.load_leaderboard(),
            clock=clock,
        )
        self._best_score = self.storage.load_best_score()

        saved = self.storage.load_game()
        if saved.grid.any():
            self._grid = saved.grid
            self._score = saved.score
            for entry in saved.history:
                self._history.push(entry)
            self._best_score = max(self._best_score, self._score)
            self._game_over = is_done(self._grid)
            logger.info('Resumed game with score %d', self._score)
            self._notify()
        else:
            self.new_game()

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def grid(self) -> ndarray:
        """Copy of the current grid."""
        return self._grid.copy()

    @property
    def score(self) -> int:
        return self._score

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def is_moving(self) -> bool:
        """True while a move is being processed."""
        return self._is_moving

    @property
    def can_undo(self) -> bool:
        return len(self._history) > 0

    @property
    def legal_moves(self) -> list[Direction]:
        """Directions that would be accepted right now; empty once the game is over."""
        if self._game_over:
            return []
        return grid_legal_moves(self._grid)

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        """Snapshots available to undo, oldest first."""
        return tuple(self._history)

    @property
    def leaderboard(self) -> tuple[LeaderboardEntry, ...]:
        return self._leaderboard.entries

    @property
    def max_tile(self) -> int:
        return int(self._grid.max())

    def new_game(self) -> None:
        """
        Start a new game: empty grid with the starting tiles, score 0, no history.

        The best score and the leaderboard are kept.
        """
        self._grid = new_grid(self.config.size)
        fill_cells(self._grid, self.config.start_tiles, rng=self._rng, probs=self.config.tile_probs)
        self._score = 0
        self._game_over = False
        self._history.clear()
        logger.info('New game started')

        self._save()
        self._notify()

    def move(self, direction: Direction | int | str) -> MoveResult:
        """
        Move the tiles in a direction.

        Parameters
        ----------
        direction : Direction | int | str
            Direction of the move.

        Returns
        -------
        MoveResult
            The grid after sliding (before the new tile is spawned), the points earned and
            whether the move was accepted.

        Notes
        -----
        - A move is ignored while another one is processed or once the game is over.
        - An accepted move saves the previous state for undo, adds the points, spawns a
          tile, checks for the end of the game, persists the session and renders it.
        - A move that changes nothing leaves the session untouched.
        """
        direction = Direction.parse(direction)
        if self._is_moving or self._game_over:
            logger.debug('Ignoring move %s (moving=%s, game over=%s)', direction.name, self._is_moving, self._game_over)
            return MoveResult(grid=self.grid, points=0, changed=False)

        self._is_moving = True
        try:
            result = apply_move(self._grid, direction)
            if not result.changed:
                return result

            self._history.push(HistoryEntry(grid=self._grid, score=self._score))
            self._grid = result.grid.copy()
            self._score += result.points
            self._best_score = max(self._best_score, self._score)

            spawn_tile(self._grid, rng=self._rng, probs=self.config.tile_probs)
            self._game_over = is_done(self._grid)
            if self._game_over:
                logger.info('Game over with score %d (best tile %d)', self._score, self.max_tile)

            self._save()
            self._notify()
            return result
        finally:
            self._is_moving = False

    def undo(self) -> bool:
        """
        Restore the grid and score as they were before the last accepted move.

        Returns
        -------
        bool
            False when there is nothing to undo or a move is being processed.
        """
        if self._is_moving:
            logger.debug('Ignoring undo while moving')
            return False

        self._is_moving = True
        try:
            entry = self._history.pop()
            if entry is None:
                logger.debug('Nothing to undo')
                return False

            self._grid = entry.grid.copy()
            self._score = entry.score
            self._game_over = is_done(self._grid)

            self._save()
            self._notify()
            return True
        finally:
            self._is_moving = False

    def record_score(self, name: str | None) -> str:
        """
        Save the current score in the leaderboard.

        Returns
        -------
        str
            The name the score was recorded under.
        """
        name = self._leaderboard.record(name, self._score)
        logger.info('Recorded score %d for %s', self._score, name)
        self.storage.save_leaderboard(self._leaderboard.entries)
        self._notify()
        return name

    def clear_leaderboard(self) -> None:
        """Remove every saved score."""
        self._leaderboard.clear()
        self.storage.save_leaderboard(self._leaderboard.entries)
        self._notify()

    def _save(self) -> None:
        self.storage.save_game(self._grid, self._score, self._history.entries())
        self.storage.save_best_score(self._best_score)

    def _notify(self) -> None:
        if self._renderer is not None:
            self._renderer(self)
