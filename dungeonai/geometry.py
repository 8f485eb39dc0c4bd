"""Grid positions and distance helpers."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Any


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Position:
    """An integer cell on the grid.

    Positions compare equal to any other position-like component
    (such as a move or patrol target) that holds the same coordinates,
    and order by ``x`` first, then ``y``.
    """

    x: int = 0
    y: int = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.x, self.y) == (other.x, other.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.x, self.y) < (other.x, other.y)

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)


def sqr(value: Any) -> Any:
    """Return ``value`` multiplied by itself."""
    return value * value


def dist_sq(lhs: Any, rhs: Any) -> float:
    """Squared euclidean distance between two objects with ``x`` and ``y``."""
    return float(sqr(lhs.x - rhs.x) + sqr(lhs.y - rhs.y))


def dist(lhs: Any, rhs: Any) -> float:
    """Euclidean distance between two objects with ``x`` and ``y``."""
    return math.sqrt(dist_sq(lhs, rhs))