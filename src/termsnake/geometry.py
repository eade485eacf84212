# geometry.py
from __future__ import annotations
from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    """Grid cell as (column, row). Compares equal to a plain (x, y) tuple."""
    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height


# ----- Directions (dx, dy); rows grow downward -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b
