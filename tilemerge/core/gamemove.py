"""
Directions a move can take.
"""
from __future__ import annotations

from enum import IntEnum


class Direction(IntEnum):
    """
    Direction of a move.

    The value is the number of counter-clockwise quarter turns that bring the
    direction onto ``LEFT``, so every move can be computed as a left move on a
    rotated grid.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def parse(cls, value: Direction | int | str) -> Direction:
        """
        Convert a name ("left", "UP", ...), an integer or a direction into a direction.

        Raises
        ------
        ValueError
            If the value does not name a direction.
        """
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f'unknown direction: {value!r}') from None
        return cls(value)

