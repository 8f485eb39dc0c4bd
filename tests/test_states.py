import random

import pytest

from dungeonai.components import Action, Actions, Hitpoints, PatrolPos, Team
from dungeonai.geometry import Position
from dungeonai.statemachine import StateMachine, StateTransition
from dungeonai.states import (
    AndTransition,
    AttackEnemyState,
    EnemyAvailableTransition,
    EnemyReachableTransition,
    FleeFromEnemyState,
    HitpointsLessThanTransition,
    MoveToEnemyState,
    NegateTransition,
    NopState,
    PatrolState,
)
from dungeonai.world import World


class Const(StateTransition):
    def __init__(self, value):
        self.value = value

    def is_available(self, world, entity):
        return self.value


@pytest.fixture
def world():
    return World()


def spawn_monster(world, x, y):
    return world.spawn(Position(x, y), Team(1), Action(), PatrolPos(x, y), Hitpoints(100.0))


def test_move_to_enemy_steps_towards(world):
    monster = spawn_monster(world, 0, 0)
    world.spawn(Position(3, 0), Team(0))
    MoveToEnemyState().act(0.0, world, monster)
    assert monster.get(Action).action == Actions.MOVE_RIGHT


def test_flee_steps_away(world):
    monster = spawn_monster(world, 0, 0)
    world.spawn(Position(3, 0), Team(0))
    FleeFromEnemyState().act(0.0, world, monster)
    assert monster.get(Action).action == Actions.MOVE_LEFT


def test_move_to_enemy_without_enemy_keeps_action(world):
    monster = spawn_monster(world, 0, 0)
    spawn_monster(world, 2, 0)
    MoveToEnemyState().act(0.0, world, monster)
    assert monster.get(Action).action == Actions.NOP


def test_nop_and_attack_states_leave_action(world):
    monster = spawn_monster(world, 0, 0)
    world.spawn(Position(1, 0), Team(0))
    NopState().act(0.0, world, monster)
    AttackEnemyState().act(0.0, world, monster)
    assert monster.get(Action).action == Actions.NOP


def test_patrol_walks_back_when_far(world):
    monster = world.spawn(Position(0, 0), PatrolPos(0, 5), Action(), Team(1))
    PatrolState(2.0).act(0.0, world, monster)
    assert monster.get(Action).action == Actions.MOVE_DOWN


def test_patrol_random_walk_stays_in_move_range(world):
    monster = spawn_monster(world, 0, 0)
    state = PatrolState(2.0, random.Random(7))
    seen = set()
    for _ in range(200):
        state.act(0.0, world, monster)
        seen.add(monster.get(Action).action)
    assert seen == {Actions.MOVE_LEFT, Actions.MOVE_RIGHT, Actions.MOVE_DOWN, Actions.MOVE_UP}


def test_enemy_available_is_inclusive(world):
    monster = spawn_monster(world, 0, 0)
    world.spawn(Position(3, 0), Team(0))
    assert EnemyAvailableTransition(3.0).is_available(world, monster)
    assert not EnemyAvailableTransition(2.5).is_available(world, monster)


def test_enemy_available_ignores_allies(world):
    monster = spawn_monster(world, 0, 0)
    spawn_monster(world, 1, 0)
    assert not EnemyAvailableTransition(10.0).is_available(world, monster)


def test_hitpoints_less_than(world):
    monster = spawn_monster(world, 0, 0)
    assert not HitpointsLessThanTransition(60.0).is_available(world, monster)
    monster.get(Hitpoints).hitpoints = 40.0
    assert HitpointsLessThanTransition(60.0).is_available(world, monster)


def test_hitpoints_less_than_without_hitpoints(world):
    entity = world.spawn(Position(0, 0))
    assert not HitpointsLessThanTransition(60.0).is_available(world, entity)


def test_enemy_reachable_never_fires(world):
    monster = spawn_monster(world, 0, 0)
    world.spawn(Position(0, 1), Team(0))
    assert EnemyReachableTransition().is_available(world, monster) is False


@pytest.mark.parametrize("value", [True, False])
def test_negate_inverts(world, value):
    entity = world.spawn()
    assert NegateTransition(Const(value)).is_available(world, entity) is (not value)


@pytest.mark.parametrize(
    "lhs, rhs", [(True, True), (True, False), (False, True), (False, False)]
)
def test_and_combines(world, lhs, rhs):
    entity = world.spawn()
    assert AndTransition(Const(lhs), Const(rhs)).is_available(world, entity) is (lhs and rhs)


def test_patrol_attack_machine_switches_on_enemy(world):
    monster = spawn_monster(world, 0, 0)
    enemy = world.spawn(Position(8, 0), Team(0))
    sm = StateMachine()
    patrol = sm.add_state(PatrolState(3.0, random.Random(1)))
    attack = sm.add_state(MoveToEnemyState())
    sm.add_transition(EnemyAvailableTransition(3.0), patrol, attack)
    sm.add_transition(NegateTransition(EnemyAvailableTransition(5.0)), attack, patrol)

    sm.act(0.0, world, monster)
    assert sm.current == patrol

    enemy.set(Position(0, 2))
    sm.act(0.0, world, monster)
    assert sm.current == attack
    assert monster.get(Action).action == Actions.MOVE_DOWN

    enemy.set(Position(0, 9))
    sm.act(0.0, world, monster)
    assert sm.current == patrol