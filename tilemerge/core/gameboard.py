"""
Grid transitions of the sliding-tile merge puzzle: merging a line, moving the whole grid,
spawning tiles and detecting the end of the game.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, asarray, int64, ndarray, rot90, zeros, zeros_like
from numpy.random import PCG64DXSM, Generator, default_rng

from tilemerge.addons.types import MoveResult
from tilemerge.core.gamemove import Direction

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Module-level generator used when the caller does not bring one.
_GENERATOR = default_rng(PCG64DXSM())


def new_grid(size: int = 4) -> ndarray:
    """Empty ``size`` x ``size`` grid."""
    return zeros((size, size), dtype=int64)


def merge_line(line: Sequence[int] | ndarray) -> tuple[int, ndarray]:
    """
    Collapse one line of the grid towards its first cell.

    Parameters
    ----------
    line : Sequence[int] | ndarray
        Cell values, oriented so that index 0 is the edge the tiles move to.

    Returns
    -------
    points : int
        Sum of the tiles created by merges.
    merged_line : ndarray
        The collapsed line, padded with zeros to the input length.

    Notes
    -----
    - Empty cells are removed before merging.
    - Merging runs once from the start of the line; a tile created by a merge
      cannot merge again, so ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``.
    """
    values = asarray(line, dtype=int64)
    non_zero = values[values != 0]
    result = zeros_like(values)

    points = 0
    write = 0
    i = 0
    while i < len(non_zero):
        if i + 1 < len(non_zero) and non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            result[write] = merged
            points += merged
            i += 2
        else:
            result[write] = non_zero[i]
            i += 1
        write += 1

    return points, result


def slide_and_merge(grid: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of the grid to the left and merge.

    Parameters
    ----------
    grid : ndarray
        The grid, left untouched.

    Returns
    -------
    points : int
        Points scored over all rows.
    updated_grid : ndarray
        A new grid with every row collapsed to the left.
    """
    result = zeros_like(grid)
    points = 0

    for i, row in enumerate(grid):
        row_points, result[i] = merge_line(row)
        points += row_points

    return points, result


def apply_move(grid: ndarray, direction: Direction | int | str) -> MoveResult:
    """
    Move every tile of the grid in a direction, without spawning a new tile.

    Parameters
    ----------
    grid : ndarray
        The current grid, left untouched.
    direction : Direction | int | str
        Direction of the move.

    Returns
    -------
    MoveResult
        The new grid, the points earned and whether the move changed anything.

    Notes
    -----
    The grid is rotated so the target edge becomes the left edge, collapsed row by row,
    then rotated back. A move is legal when it scores or when any cell differs; a pure
    slide scores nothing and still counts.
    """
    turns = Direction.parse(direction).value
    points, moved = slide_and_merge(rot90(grid, k=turns))
    updated = rot90(moved, k=-turns).copy()
    changed = points > 0 or bool(np_any(updated != grid))
    return MoveResult(grid=updated, points=points, changed=changed)


def legal_moves(grid: ndarray) -> list[Direction]:
    """Directions whose move would change the grid, in ``Direction`` order."""
    return [direction for direction in Direction if apply_move(grid, direction).changed]


def spawn_tile(grid: ndarray, rng: Generator | None = None, probs: Mapping[int, float] | None = None) -> bool:
    """
    Place one new tile on a random empty cell.

    Parameters
    ----------
    grid : ndarray
        The grid. **Modified in-place.**
    rng : Generator, optional
        Source of randomness; a module-level generator is used when omitted.
    probs : Mapping[int, float], optional
        Tile values and their probabilities (default 2: 0.9, 4: 0.1).

    Returns
    -------
    bool
        False when the grid has no empty cell, in which case it is not modified.

    Notes
    -----
    Empty cells are enumerated in row-major order and one is drawn uniformly, so
    a seeded generator always yields the same placement.
    """
    rng = rng if rng is not None else _GENERATOR
    probs = probs if probs is not None else TILE_SPAWN_PROBS

    empty_cells = argwhere(grid == 0)
    if len(empty_cells) == 0:
        return False

    row, col = empty_cells[rng.integers(len(empty_cells))]
    grid[row, col] = int(rng.choice(list(probs), p=list(probs.values())))
    return True


def fill_cells(
    grid: ndarray, number_tile: int, rng: Generator | None = None, probs: Mapping[int, float] | None = None
) -> int:
    """
    Spawn up to ``number_tile`` tiles and return how many were placed.

    The grid is **modified in-place**; spawning stops early once it is full.
    """
    placed = 0
    for _ in range(number_tile):
        if not spawn_tile(grid, rng=rng, probs=probs):
            break
        placed += 1
    return placed


def next_state(grid: ndarray, direction: Direction | int | str, rng: Generator | None = None) -> MoveResult:
    """
    Apply a move and, when it changed the grid, spawn one tile on the result.

    The returned grid is a new array; an illegal move returns a copy of the input.
    """
    result = apply_move(grid, direction)
    if result.changed:
        spawn_tile(result.grid, rng=rng)
    return result


def is_done(grid: ndarray) -> bool:
    """
    Check whether no move is left.

    Parameters
    ----------
    grid : ndarray
        The current grid.

    Returns
    -------
    bool
        True when every cell holds a tile and no tile equals its right or bottom neighbour.
    """
    return bool(np_all(grid != 0) and not np_any(grid[:-1] == grid[1:]) and not np_any(grid[:, :-1] == grid[:, 1:]))


def is_valid_grid(grid: ndarray, size: int) -> bool:
    """
    Check that a grid is square of the given size and only holds zeros or powers of two >= 2.
    """
    if grid.ndim != 2 or grid.shape != (size, size):
        return False
    tiles = grid[grid != 0]
    return bool(np_all(tiles >= 2) and not np_any(tiles & (tiles - 1)))
