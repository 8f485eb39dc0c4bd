"""Shortest paths over a dungeon grid: A*, IDA* and ARA*.

Walls cannot be entered, water costs ten to step onto and every other
tile costs one. Paths are lists of positions from the start to the goal,
both included; an empty list means no path was found.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from dungeonai.components import DungeonData
from dungeonai.dungeon import WALL, WATER
from dungeonai.geometry import Position

logger = logging.getLogger(__name__)

WATER_COST = 10.0
FLOOR_COST = 1.0
ARA_INITIAL_EPSILON = 7.0
ARA_EPSILON_STEP = 0.5

# right, left, down, up
_NEIGHBOURS = (Position(1, 0), Position(-1, 0), Position(0, 1), Position(0, -1))
# right, down, left, up
_ARA_NEIGHBOURS = (Position(1, 0), Position(0, 1), Position(-1, 0), Position(0, -1))


def heuristic(lhs: Any, rhs: Any) -> float:
    """Straight-line distance between two cells."""
    return math.sqrt((lhs.x - rhs.x) ** 2 + (lhs.y - rhs.y) ** 2)


def _as_position(value: Any) -> Position:
    return Position(int(value.x), int(value.y))


def _inside(dungeon: DungeonData, pos: Position) -> bool:
    return 0 <= pos.x < dungeon.width and 0 <= pos.y < dungeon.height


def _step_cost(dungeon: DungeonData, pos: Position) -> Optional[float]:
    """Cost of stepping onto ``pos``, or None when it cannot be entered."""
    if not _inside(dungeon, pos):
        return None
    tile = dungeon.tiles[pos.y * dungeon.width + pos.x]
    if tile == WALL:
        return None
    return WATER_COST if tile == WATER else FLOOR_COST


def _reconstruct(prev: dict[Position, Position], goal: Position) -> list[Position]:
    path = [goal]
    current = goal
    while current in prev:
        current = prev[current]
        path.append(current)
    path.reverse()
    return path


def find_path_a_star(
    dungeon: DungeonData, start: Any, goal: Any, weight: float = 1.0
) -> list[Position]:
    """Find a path with A*, scaling the heuristic by ``weight``.

    The open entry with the lowest score is expanded next; on equal scores
    the one added earliest wins. A start outside the dungeon gives no path.
    """
    start = _as_position(start)
    goal = _as_position(goal)
    if not _inside(dungeon, start):
        return []

    g_score: dict[Position, float] = {start: 0.0}
    f_score: dict[Position, float] = {start: weight * heuristic(start, goal)}
    prev: dict[Position, Position] = {}
    open_list: list[Position] = [start]
    closed: set[Position] = set()

    while open_list:
        current = min(open_list, key=lambda p: f_score.get(p, math.inf))
        if current == goal:
            return _reconstruct(prev, goal)
        open_list.remove(current)
        if current in closed:
            continue
        closed.add(current)
        for step in _NEIGHBOURS:
            neighbour = current + step
            cost = _step_cost(dungeon, neighbour)
            if cost is None:
                continue
            tentative = g_score[current] + cost
            if tentative < g_score.get(neighbour, math.inf):
                prev[neighbour] = current
                g_score[neighbour] = tentative
                f_score[neighbour] = tentative + weight * heuristic(neighbour, goal)
            if neighbour not in open_list:
                open_list.append(neighbour)
    return []


def _ida_search(
    dungeon: DungeonData,
    path: list[Position],
    on_path: set[Position],
    g: float,
    bound: float,
    goal: Position,
) -> tuple[bool, float]:
    """Depth-first search below ``bound``.

    Returns whether the goal was reached and, if not, the lowest score
    that went over the bound.
    """
    pos = path[-1]
    f = g + heuristic(pos, goal)
    if f > bound:
        return False, f
    if pos == goal:
        return True, f
    lowest = math.inf
    for step in _NEIGHBOURS:
        neighbour = pos + step
        cost = _step_cost(dungeon, neighbour)
        if cost is None or neighbour in on_path:
            continue
        path.append(neighbour)
        on_path.add(neighbour)
        found, value = _ida_search(dungeon, path, on_path, g + cost, bound, goal)
        if found:
            return True, value
        lowest = min(lowest, value)
        path.pop()
        on_path.discard(neighbour)
    return False, lowest


def find_ida_star_path(dungeon: DungeonData, start: Any, goal: Any) -> list[Position]:
    """Find a path with iterative-deepening A*.

    A start outside the dungeon, or a goal that cannot be entered, gives
    no path.
    """
    start = _as_position(start)
    goal = _as_position(goal)
    if not _inside(dungeon, start):
        return []
    if start != goal and _step_cost(dungeon, goal) is None:
        return []

    bound = heuristic(start, goal)
    path = [start]
    on_path = {start}
    while True:
        found, value = _ida_search(dungeon, path, on_path, 0.0, bound, goal)
        if found:
            return path
        if value == math.inf:
            return []
        bound = value
        logger.debug("new bound %.1f", bound)


def find_path_ara_star(dungeon: DungeonData, start: Any, goal: Any) -> list[Position]:
    """Find a path with anytime repairing A*.

    The search starts with the heuristic inflated sevenfold and lowers the
    inflation by a half while its estimate of the suboptimality stays
    above one, reusing earlier work each time.
    """
    start = _as_position(start)
    goal = _as_position(goal)
    if not _inside(dungeon, start):
        return []

    eps = ARA_INITIAL_EPSILON
    g_score: dict[Position, float] = {start: 0.0}
    prev: dict[Position, Position] = {}
    open_set: set[Position] = {start}
    closed: set[Position] = set()
    incons: list[Position] = []

    def f_score(pos: Position) -> float:
        return g_score.get(pos, math.inf) + eps * heuristic(pos, goal)

    def improve_neighbour(pos: Position, neighbour: Position) -> None:
        cost = _step_cost(dungeon, neighbour)
        if cost is None:
            return
        improved = g_score[pos] + cost
        if g_score.get(neighbour, math.inf) > improved:
            g_score[neighbour] = improved
            prev[neighbour] = pos
            if neighbour in closed:
                incons.append(neighbour)
            else:
                open_set.add(neighbour)

    def improve_path() -> None:
        while open_set:
            pos = min(open_set, key=lambda p: (f_score(p), p))
            if f_score(goal) <= f_score(pos):
                break
            open_set.remove(pos)
            closed.add(pos)
            for step in _ARA_NEIGHBOURS:
                improve_neighbour(pos, pos + step)

    def estimate_eps() -> float:
        candidates = [f_score(p) for p in open_set]
        candidates.extend(f_score(p) for p in incons)
        goal_g = g_score.get(goal, math.inf)
        if not candidates or goal_g == math.inf:
            return eps
        lowest = min(candidates)
        if lowest == math.inf or lowest == 0.0:
            return eps
        return min(eps, goal_g / lowest)

    improve_path()
    while (estimate := estimate_eps()) > 1.0:
        logger.debug("suboptimality estimate %f", estimate)
        eps -= ARA_EPSILON_STEP
        # the inflation changed, so every pending cell is queued again
        open_set.update(incons)
        incons.clear()
        closed.clear()
        improve_path()

    if g_score.get(goal, math.inf) == math.inf:
        return []
    return _reconstruct(prev, goal) if goal != start else [start]