"""Behaviour tree nodes that plan an actor's action each turn."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from dungeonai.ai_utils import closest_enemy, inverse_move, move_towards
from dungeonai.blackboard import Blackboard
from dungeonai.components import (
    Action,
    Actions,
    HealAmount,
    Hitpoints,
    PowerupAmount,
    WayPoint,
)
from dungeonai.geometry import Position, dist

if TYPE_CHECKING:
    from dungeonai.world import Entity, World

UtilityFunction = Callable[[Blackboard], float]


class BehResult(Enum):
    """Outcome of updating a behaviour node."""

    SUCCESS = "success"
    FAIL = "fail"
    RUNNING = "running"


def _set_action(entity: Entity, action: int) -> None:
    current = entity.get(Action)
    if current is None:
        entity.set(Action(action))
    else:
        current.action = action


def _entity_blackboard(entity: Entity) -> Blackboard:
    board = entity.get(Blackboard)
    if board is None:
        board = Blackboard()
        entity.set(board)
    return board


class BehNode(ABC):
    """A node of a behaviour tree."""

    @abstractmethod
    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        """Run the node for one turn and report how it went."""


class _CompoundNode(BehNode):
    def __init__(self, nodes: Iterable[BehNode] = ()) -> None:
        self.nodes: list[BehNode] = list(nodes)

    def push(self, node: BehNode) -> _CompoundNode:
        """Append a child node and return self."""
        self.nodes.append(node)
        return self


class Sequence(_CompoundNode):
    """Runs children in order until one does not succeed."""

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        for node in self.nodes:
            result = node.update(world, entity, blackboard)
            if result is not BehResult.SUCCESS:
                return result
        return BehResult.SUCCESS


class Selector(_CompoundNode):
    """Runs children in order until one does not fail."""

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        for node in self.nodes:
            result = node.update(world, entity, blackboard)
            if result is not BehResult.FAIL:
                return result
        return BehResult.FAIL


class Parallel(_CompoundNode):
    """Runs children in order until one stops running."""

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        for node in self.nodes:
            result = node.update(world, entity, blackboard)
            if result is not BehResult.RUNNING:
                return result
        return BehResult.RUNNING


class UtilitySelector(BehNode):
    """Tries children from the highest utility score down until one does not fail."""

    def __init__(self, nodes: Iterable[tuple[BehNode, UtilityFunction]] = ()) -> None:
        self.nodes: list[tuple[BehNode, UtilityFunction]] = list(nodes)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        scored = [(utility(blackboard), node) for node, utility in self.nodes]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        for _, node in scored:
            result = node.update(world, entity, blackboard)
            if result is not BehResult.FAIL:
                return result
        return BehResult.FAIL


class Not(BehNode):
    """Swaps success and failure of the wrapped node; running stays running."""

    def __init__(self, node: BehNode) -> None:
        self.node = node

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        result = self.node.update(world, entity, blackboard)
        if result is BehResult.SUCCESS:
            return BehResult.FAIL
        if result is BehResult.FAIL:
            return BehResult.SUCCESS
        return result


class MoveToEntity(BehNode):
    """Steps towards the entity named in the blackboard until standing on it."""

    def __init__(self, entity: Entity, bb_name: str) -> None:
        self.bb_name = bb_name
        _entity_blackboard(entity).register(bb_name, None)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        target = blackboard.get(self.bb_name)
        if not world.is_alive(target):
            return BehResult.FAIL
        pos = entity.get(Position)
        target_pos = target.get(Position)
        if pos is None or target_pos is None:
            return BehResult.RUNNING
        if pos != target_pos:
            _set_action(entity, move_towards(pos, target_pos))
            return BehResult.RUNNING
        return BehResult.SUCCESS


class IsLowHp(BehNode):
    """Succeeds while hitpoints are below the threshold."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        hp = entity.get(Hitpoints)
        if hp is None:
            return BehResult.SUCCESS
        return BehResult.SUCCESS if hp.hitpoints < self.threshold else BehResult.FAIL


class FindEnemy(BehNode):
    """Stores the closest enemy within ``distance`` in the blackboard."""

    def __init__(self, entity: Entity, distance: float, bb_name: str) -> None:
        self.distance = distance
        self.bb_name = bb_name
        _entity_blackboard(entity).register(bb_name, None)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        found = closest_enemy(world, entity)
        if found is None:
            return BehResult.FAIL
        enemy, enemy_pos = found
        if dist(enemy_pos, entity.get(Position)) > self.distance:
            return BehResult.FAIL
        blackboard.set(self.bb_name, enemy)
        return BehResult.SUCCESS


class Flee(BehNode):
    """Steps away from the entity named in the blackboard, forever running."""

    def __init__(self, entity: Entity, bb_name: str) -> None:
        self.bb_name = bb_name
        _entity_blackboard(entity).register(bb_name, None)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        target = blackboard.get(self.bb_name)
        if not world.is_alive(target):
            return BehResult.FAIL
        pos = entity.get(Position)
        target_pos = target.get(Position)
        if pos is not None and target_pos is not None:
            _set_action(entity, inverse_move(move_towards(pos, target_pos)))
        return BehResult.RUNNING


class Patrol(BehNode):
    """Wanders around the entity's starting cell, walking back when too far."""

    def __init__(
        self,
        entity: Entity,
        patrol_dist: float,
        bb_name: str,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.patrol_dist = patrol_dist
        self.bb_name = bb_name
        self.rng = rng if rng is not None else random.Random()
        board = _entity_blackboard(entity)
        board.register(bb_name, Position())
        pos = entity.get(Position)
        if pos is not None:
            board.set(bb_name, Position(pos.x, pos.y))

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        pos = entity.get(Position)
        if pos is None:
            return BehResult.RUNNING
        patrol_pos = blackboard.get(self.bb_name, Position())
        if dist(pos, patrol_pos) > self.patrol_dist:
            _set_action(entity, move_towards(pos, patrol_pos))
        else:
            _set_action(entity, self.rng.randint(Actions.MOVE_START, Actions.MOVE_END - 1))
        return BehResult.RUNNING


class PatchUp(BehNode):
    """Heals itself while hitpoints are below the threshold."""

    def __init__(self, threshold: float = 100.0) -> None:
        self.threshold = threshold

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        hp = entity.get(Hitpoints)
        if hp is None or hp.hitpoints >= self.threshold:
            return BehResult.SUCCESS
        _set_action(entity, Actions.HEAL_SELF)
        return BehResult.RUNNING


class FindPickUp(BehNode):
    """Stores the closest heal or power-up in the blackboard."""

    def __init__(self, entity: Entity, bb_name: str) -> None:
        self.bb_name = bb_name
        _entity_blackboard(entity).register(bb_name, None)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        pos = entity.get(Position)
        if pos is None:
            return BehResult.FAIL
        closest: Any = None
        best = math.inf
        for kind in (HealAmount, PowerupAmount):
            for item, item_pos, _ in world.query(Position, kind):
                current = dist(item_pos, pos)
                if current < best:
                    best = current
                    closest = item
        if closest is None:
            return BehResult.FAIL
        blackboard.set(self.bb_name, closest)
        return BehResult.SUCCESS


class NextWaypoint(BehNode):
    """Replaces the waypoint in the blackboard with the one it links to."""

    def __init__(self, entity: Entity, bb_name: str) -> None:
        self.bb_name = bb_name
        _entity_blackboard(entity).register(bb_name, None)

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        current = blackboard.get(self.bb_name)
        if current is None:
            return BehResult.FAIL
        waypoint = current.get(WayPoint)
        if waypoint is None or not world.is_alive(waypoint.next):
            return BehResult.FAIL
        blackboard.set(self.bb_name, waypoint.next)
        return BehResult.SUCCESS


class BehaviourTree:
    """Owns the root node of an actor's behaviour."""

    def __init__(self, root: BehNode) -> None:
        self.root = root

    def update(self, world: World, entity: Entity, blackboard: Blackboard) -> BehResult:
        """Run the root node once."""
        return self.root.update(world, entity, blackboard)