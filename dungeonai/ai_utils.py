"""Movement helpers shared by states and behaviour nodes."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Optional

from dungeonai.components import Actions, Team
from dungeonai.geometry import Position, dist

if TYPE_CHECKING:
    from dungeonai.world import Entity, World


def move_towards(origin: Any, target: Any) -> Actions:
    """Return the single step that best closes the gap from origin to target."""
    delta_x = target.x - origin.x
    delta_y = target.y - origin.y
    if abs(delta_x) > abs(delta_y):
        return Actions.MOVE_RIGHT if delta_x > 0 else Actions.MOVE_LEFT
    return Actions.MOVE_UP if delta_y < 0 else Actions.MOVE_DOWN


_OPPOSITE = {
    Actions.MOVE_LEFT: Actions.MOVE_RIGHT,
    Actions.MOVE_RIGHT: Actions.MOVE_LEFT,
    Actions.MOVE_UP: Actions.MOVE_DOWN,
    Actions.MOVE_DOWN: Actions.MOVE_UP,
}


def inverse_move(move: int) -> int:
    """Return the opposite step; other actions come back unchanged."""
    return _OPPOSITE.get(move, move)


def closest_enemy(world: World, entity: Entity) -> Optional[tuple[Entity, Position]]:
    """Return the nearest entity of another team with its position, or None.

    The entity itself needs a position and a team; on equal distances
    the enemy found first wins.
    """
    pos = entity.get(Position)
    team = entity.get(Team)
    if pos is None or team is None:
        return None
    best: Optional[tuple[Entity, Position]] = None
    best_dist = math.inf
    for enemy, enemy_pos, enemy_team in world.query(Position, Team):
        if enemy_team.team == team.team:
            continue
        current = dist(enemy_pos, pos)
        if current < best_dist:
            best_dist = current
            best = (enemy, enemy_pos)
    return best