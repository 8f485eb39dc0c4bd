"""Ready-made states and transitions for actor state machines."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dungeonai.ai_utils import closest_enemy, inverse_move, move_towards
from dungeonai.components import Action, Actions, Hitpoints, PatrolPos, Team
from dungeonai.geometry import Position, dist
from dungeonai.statemachine import State, StateTransition

if TYPE_CHECKING:
    from dungeonai.world import Entity, World


def _set_action(entity: Entity, action: int) -> None:
    current = entity.get(Action)
    if current is None:
        entity.set(Action(action))
    else:
        current.action = action


class AttackEnemyState(State):
    """Placeholder attack state that plans nothing."""

    def act(self, dt: float, world: World, entity: Entity) -> None:
        return None


class MoveToEnemyState(State):
    """Step towards the closest enemy."""

    def act(self, dt: float, world: World, entity: Entity) -> None:
        found = closest_enemy(world, entity)
        if found is not None:
            _set_action(entity, move_towards(entity.get(Position), found[1]))


class FleeFromEnemyState(State):
    """Step away from the closest enemy."""

    def act(self, dt: float, world: World, entity: Entity) -> None:
        found = closest_enemy(world, entity)
        if found is not None:
            step = move_towards(entity.get(Position), found[1])
            _set_action(entity, inverse_move(step))


@dataclass
class PatrolState(State):
    """Wander randomly near the patrol point, walking back when too far."""

    patrol_dist: float
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def act(self, dt: float, world: World, entity: Entity) -> None:
        pos = entity.get(Position)
        patrol_pos = entity.get(PatrolPos)
        if pos is None or patrol_pos is None:
            return
        if dist(pos, patrol_pos) > self.patrol_dist:
            _set_action(entity, move_towards(pos, patrol_pos))
        else:
            _set_action(entity, self.rng.randint(Actions.MOVE_START, Actions.MOVE_END - 1))


class NopState(State):
    """A state that does nothing."""

    def act(self, dt: float, world: World, entity: Entity) -> None:
        return None


@dataclass
class EnemyAvailableTransition(StateTransition):
    """Fires when an enemy is within ``trigger_dist``."""

    trigger_dist: float

    def is_available(self, world: World, entity: Entity) -> bool:
        pos = entity.get(Position)
        team = entity.get(Team)
        if pos is None or team is None:
            return False
        return any(
            enemy_team.team != team.team and dist(enemy_pos, pos) <= self.trigger_dist
            for _, enemy_pos, enemy_team in world.query(Position, Team)
        )


@dataclass
class HitpointsLessThanTransition(StateTransition):
    """Fires when the entity's hitpoints drop below ``threshold``."""

    threshold: float

    def is_available(self, world: World, entity: Entity) -> bool:
        hp = entity.get(Hitpoints)
        return hp is not None and hp.hitpoints < self.threshold


class EnemyReachableTransition(StateTransition):
    """Never fires."""

    def is_available(self, world: World, entity: Entity) -> bool:
        return False


@dataclass
class NegateTransition(StateTransition):
    """Fires when the wrapped transition does not."""

    transition: StateTransition

    def is_available(self, world: World, entity: Entity) -> bool:
        return not self.transition.is_available(world, entity)


@dataclass
class AndTransition(StateTransition):
    """Fires when both wrapped transitions do."""

    lhs: StateTransition
    rhs: StateTransition

    def is_available(self, world: World, entity: Entity) -> bool:
        return self.lhs.is_available(world, entity) and self.rhs.is_available(world, entity)