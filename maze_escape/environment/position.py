"""Maze coordinates and direction arithmetic."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """The four grid directions, in the order adjacency is always scanned."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, col) offset of one step in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """Zero-indexed (level, row, col) triple.

    Coordinates are plain signed ints: stepping off the top or left edge
    yields a negative row/col, which every bounds-checked lookup rejects.
    Translation never changes the level; only a ladder climb does.
    """

    level: int
    row: int
    col: int

    def translate(self, direction: Direction, amount: int = 1) -> Position:
        """Return the position ``amount`` steps away in ``direction``."""
        d_row, d_col = direction.delta
        return replace(self, row=self.row + d_row * amount, col=self.col + d_col * amount)

    def __str__(self) -> str:
        return f"({self.level}, {self.row}, {self.col})"
