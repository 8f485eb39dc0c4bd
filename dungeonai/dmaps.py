"""Dijkstra maps over the dungeon and the actors that follow them."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from dungeonai.components import (
    Action,
    Actions,
    DijkstraMapData,
    DmapWeights,
    DungeonData,
    Hive,
    Team,
    WeightData,
)
from dungeonai.dungeon import FLOOR
from dungeonai.geometry import Position

if TYPE_CHECKING:
    from dungeonai.world import World

INVALID_TILE_VALUE = 1e5
PLAYER_TEAM = 0

# Candidate steps in the order they are weighed; ties go to the earlier one.
_STEPS = (
    (Actions.NOP, 0, 0),
    (Actions.MOVE_LEFT, -1, 0),
    (Actions.MOVE_RIGHT, 1, 0),
    (Actions.MOVE_DOWN, 0, 1),
    (Actions.MOVE_UP, 0, -1),
)


def process_dmap(values: list[float], dungeon: DungeonData) -> list[float]:
    """Relax ``values`` in place until every floor tile is at most one above its lowest floor neighbour.

    Returns the same list.
    """
    width, height, tiles = dungeon.width, dungeon.height, dungeon.tiles
    if len(values) != width * height:
        raise ValueError(f"expected {width * height} values, got {len(values)}")

    def value_at(x: int, y: int, default: float) -> float:
        if 0 <= x < width and 0 <= y < height and tiles[y * width + x] == FLOOR:
            return values[y * width + x]
        return default

    done = False
    while not done:
        done = True
        for y in range(height):
            for x in range(width):
                index = y * width + x
                if tiles[index] != FLOOR:
                    continue
                mine = values[index]
                lowest = min(
                    mine,
                    value_at(x - 1, y, mine),
                    value_at(x + 1, y, mine),
                    value_at(x, y - 1, mine),
                    value_at(x, y + 1, mine),
                )
                if lowest < mine - 1.0:
                    values[index] = lowest + 1.0
                    done = False
    return values


def _map_from_sources(dungeon: DungeonData, sources: Any) -> list[float]:
    values = [INVALID_TILE_VALUE] * (dungeon.width * dungeon.height)
    for pos in sources:
        if 0 <= pos.x < dungeon.width and 0 <= pos.y < dungeon.height:
            values[pos.y * dungeon.width + pos.x] = 0.0
    return process_dmap(values, dungeon)


def gen_player_approach_map(world: World) -> list[float]:
    """Distance from every floor tile to the nearest member of the player's team."""
    dungeon = world.single(DungeonData)
    if dungeon is None:
        return []
    sources = (pos for _, pos, team in world.query(Position, Team) if team.team == PLAYER_TEAM)
    return _map_from_sources(dungeon, sources)


def gen_player_flee_map(world: World) -> list[float]:
    """A map whose downhill leads away from the player's team."""
    values = gen_player_approach_map(world)
    dungeon = world.single(DungeonData)
    if dungeon is None:
        return values
    values = [v * -1.2 if v < INVALID_TILE_VALUE else v for v in values]
    return process_dmap(values, dungeon)


def gen_hive_pack_map(world: World) -> list[float]:
    """Distance from every floor tile to the nearest hive."""
    dungeon = world.single(DungeonData)
    if dungeon is None:
        return []
    sources = (pos for _, pos, _ in world.query(Position, Hive))
    return _map_from_sources(dungeon, sources)


def _weighted_value(values: list[float], dungeon: DungeonData, x: int, y: int, weight: WeightData) -> float:
    if not (0 <= x < dungeon.width and 0 <= y < dungeon.height):
        return INVALID_TILE_VALUE
    index = y * dungeon.width + x
    if index >= len(values):
        return INVALID_TILE_VALUE
    value = values[index]
    if value >= INVALID_TILE_VALUE:
        return value
    try:
        return math.pow(value * weight.mult, weight.power)
    except ValueError:
        return math.nan


def process_dmap_followers(world: World) -> None:
    """Pick for each map follower the step with the lowest weighted sum of its maps.

    Followers whose current cell is already lowest keep their planned action.
    Maps are looked up by entity name; names with no map are ignored.
    """
    dungeon = world.single(DungeonData)
    if dungeon is None:
        return
    for _, pos, action, weights in world.query(Position, Action, DmapWeights):
        totals = [0.0] * len(_STEPS)
        for name, weight in weights.weights.items():
            holder = world.lookup(name)
            dmap = holder.get(DijkstraMapData) if holder is not None else None
            if dmap is None:
                continue
            for slot, (_, dx, dy) in enumerate(_STEPS):
                totals[slot] += _weighted_value(dmap.values, dungeon, pos.x + dx, pos.y + dy, weight)
        lowest = totals[0]
        for (step, _, _), total in zip(_STEPS, totals):
            if total < lowest:
                lowest = total
                action.action = step