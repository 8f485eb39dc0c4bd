"""Component types attached to world entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Iterator, Optional

from dungeonai.geometry import Position

if TYPE_CHECKING:
    from dungeonai.world import Entity


class Actions(IntEnum):
    """Actions an actor can take on its turn."""

    NOP = 0
    MOVE_LEFT = 1
    MOVE_START = 1
    MOVE_RIGHT = 2
    MOVE_DOWN = 3
    MOVE_UP = 4
    MOVE_END = 5
    ATTACK = 5
    HEAL_SELF = 6
    PASS = 7
    NUM = 8


class MovePos(Position):
    """Cell an actor is about to move into."""


class PatrolPos(Position):
    """Cell an actor patrols around."""


@dataclass
class Hitpoints:
    hitpoints: float = 10.0


@dataclass
class Action:
    action: int = Actions.NOP


@dataclass
class NumActions:
    num_actions: int = 1
    cur_actions: int = 0


@dataclass
class MeleeDamage:
    damage: float = 2.0


@dataclass
class HealAmount:
    amount: float = 0.0


@dataclass
class PowerupAmount:
    amount: float = 0.0


@dataclass
class PlayerInput:
    """Key states seen on the previous frame."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    passed: bool = False


@dataclass(frozen=True)
class IsPlayer:
    """Tag for the player entity."""


@dataclass(frozen=True)
class WorldInfoGatherer:
    """Tag for entities whose blackboard is filled by sensors."""


@dataclass(frozen=True)
class IsPickUpper:
    """Tag for entities that may collect heals and power-ups."""


@dataclass(frozen=True)
class Hive:
    """Tag for entities that a hive pack gathers around."""


@dataclass
class Team:
    team: int = 0


@dataclass
class TurnCounter:
    count: int = 0


@dataclass
class ActionLog:
    """Bounded log of recent messages, oldest first."""

    log: list[str] = field(default_factory=list)
    capacity: int = 5

    def push(self, message: str) -> None:
        """Append a message, dropping the oldest ones beyond capacity."""
        self.log.append(message)
        if len(self.log) > self.capacity:
            del self.log[: len(self.log) - self.capacity]


@dataclass
class DungeonData:
    """Row-major grid of tile characters."""

    tiles: list[str]
    width: int
    height: int

    def __post_init__(self) -> None:
        self.tiles = list(self.tiles)
        if self.width < 0 or self.height < 0:
            raise ValueError("dungeon dimensions must not be negative")
        if len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} tiles, got {len(self.tiles)}"
            )

    def tile(self, x: int, y: int) -> str:
        """Return the tile at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) is outside the dungeon")
        return self.tiles[y * self.width + x]

    def rows(self) -> Iterator[str]:
        """Yield each row as a string, top to bottom."""
        for y in range(self.height):
            start = y * self.width
            yield "".join(self.tiles[start : start + self.width])


@dataclass
class DijkstraMapData:
    values: list[float] = field(default_factory=list)


@dataclass
class WeightData:
    mult: float = 1.0
    power: float = 1.0


@dataclass
class DmapWeights:
    """Dijkstra map names with the weighting applied to each."""

    weights: dict[str, WeightData] = field(default_factory=dict)


@dataclass
class WayPoint:
    """A patrol point linked to the next one in its route."""

    next: Optional[Entity] = None