"""Random dungeon generation and tile queries."""

from __future__ import annotations

import random
from collections import deque
from typing import Iterable, Iterator, Optional

from dungeonai.components import DungeonData
from dungeonai.geometry import Position, dist_sq

WALL = "#"
FLOOR = " "
WATER = "o"

# right, down, left, up
_DIRECTIONS = (Position(1, 0), Position(0, 1), Position(-1, 0), Position(0, -1))


def _clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def _step(pos: Position, direction: Position, width: int, height: int) -> Position:
    """Move one cell, staying inside the dungeon's inner rectangle."""
    return Position(
        _clamp(pos.x + direction.x, 1, width - 2),
        _clamp(pos.y + direction.y, 1, height - 2),
    )


def _carve_path(tiles: list[str], width: int, start: Position, end: Position) -> None:
    """Dig a staircase corridor from ``start`` to ``end``, leaving ``start`` untouched."""
    x, y = start.x, start.y
    while (x, y) != (end.x, end.y):
        dx, dy = end.x - x, end.y - y
        if abs(dx) > abs(dy):
            x += 1 if dx > 0 else -1
        else:
            y += 1 if dy > 0 else -1
        tiles[y * width + x] = FLOOR


def _connections(starts: list[Position], connect_all: bool) -> Iterator[tuple[Position, Position]]:
    if connect_all:
        for start in starts:
            for end in starts:
                yield start, end
        return
    for index, start in enumerate(starts[:-1]):
        closest = min(starts[index + 1 :], key=lambda other: dist_sq(start, other))
        yield start, closest


def gen_drunk_dungeon(
    width: int,
    height: int,
    num_iter: int = 4,
    max_excavations: int = 200,
    rng: Optional[random.Random] = None,
    connect_all: bool = True,
) -> DungeonData:
    """Dig a cave with drunkard's walks and join their starting points.

    Each of ``num_iter`` walks starts at a random inner cell and digs until
    it has turned ``max_excavations`` walls into floor. The starting points
    are then joined by corridors: every pair of them when ``connect_all``
    is true, otherwise each to the closest of those started after it.
    The outer border always stays wall.
    """
    if width < 3 or height < 3:
        raise ValueError("a dungeon needs at least 3 columns and 3 rows")
    if num_iter < 0 or max_excavations < 0:
        raise ValueError("iteration and excavation counts must not be negative")
    inner = (width - 2) * (height - 2)
    if num_iter * max_excavations > inner:
        raise ValueError(
            f"cannot excavate {num_iter * max_excavations} tiles in {inner} inner cells"
        )
    rng = rng if rng is not None else random.Random()
    tiles = [WALL] * (width * height)

    starts: list[Position] = []
    for _ in range(num_iter):
        pos = Position(rng.randint(1, width - 2), rng.randint(1, height - 2))
        starts.append(pos)
        dug = 0
        while dug < max_excavations:
            index = pos.y * width + pos.x
            if tiles[index] == WALL:
                dug += 1
                tiles[index] = FLOOR
            pos = _step(pos, rng.choice(_DIRECTIONS), width, height)

    for start, end in _connections(starts, connect_all):
        _carve_path(tiles, width, start, end)

    return DungeonData(tiles, width, height)


def _walk_neighbours(dungeon: DungeonData, pos: Position) -> Iterable[Position]:
    for direction in _DIRECTIONS:
        nxt = _step(pos, direction, dungeon.width, dungeon.height)
        if dungeon.tiles[nxt.y * dungeon.width + nxt.x] != WALL:
            yield nxt


def _reachable_floor(dungeon: DungeonData, start: Position) -> int:
    """Count floor tiles a walker from ``start`` can reach without crossing walls."""
    seen = {start}
    queue = deque([start])
    while queue:
        pos = queue.popleft()
        for nxt in _walk_neighbours(dungeon, pos):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return sum(1 for pos in seen if dungeon.tiles[pos.y * dungeon.width + pos.x] == FLOOR)


def spill_drunk_water(
    dungeon: DungeonData,
    num_iter: int = 8,
    max_spills: int = 10,
    rng: Optional[random.Random] = None,
) -> None:
    """Flood floor tiles with water using drunkard's walks, in place.

    Each walk starts on a random floor tile, never steps onto walls and
    stops once it has turned ``max_spills`` floor tiles into water.
    """
    if num_iter < 0 or max_spills < 0:
        raise ValueError("iteration and spill counts must not be negative")
    total_floor = dungeon.tiles.count(FLOOR)
    if num_iter * max_spills > total_floor:
        raise ValueError(
            f"cannot spill {num_iter * max_spills} tiles on {total_floor} floor tiles"
        )
    rng = rng if rng is not None else random.Random()
    width = dungeon.width
    for _ in range(num_iter):
        if max_spills == 0:
            continue
        pos = find_walkable_tile(dungeon, rng)
        if _reachable_floor(dungeon, pos) < max_spills:
            raise ValueError("not enough connected floor to spill on")
        spilled = 0
        while True:
            index = pos.y * width + pos.x
            if dungeon.tiles[index] == FLOOR:
                spilled += 1
                dungeon.tiles[index] = WATER
                if spilled >= max_spills:
                    break
            while True:
                nxt = _step(pos, rng.choice(_DIRECTIONS), width, dungeon.height)
                if dungeon.tiles[nxt.y * width + nxt.x] != WALL:
                    pos = nxt
                    break


def find_walkable_tile(dungeon: DungeonData, rng: Optional[random.Random] = None) -> Position:
    """Return a random floor tile."""
    rng = rng if rng is not None else random.Random()
    floors = [
        Position(index % dungeon.width, index // dungeon.width)
        for index, tile in enumerate(dungeon.tiles)
        if tile == FLOOR
    ]
    if not floors:
        raise ValueError("the dungeon has no floor tiles")
    return rng.choice(floors)


def is_tile_walkable(dungeon: DungeonData, pos: Position) -> bool:
    """Tell whether ``pos`` lies inside the dungeon on a floor tile."""
    if not (0 <= pos.x < dungeon.width and 0 <= pos.y < dungeon.height):
        return False
    return dungeon.tiles[pos.y * dungeon.width + pos.x] == FLOOR