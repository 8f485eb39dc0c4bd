import pytest

from dungeonai.ai_utils import closest_enemy, inverse_move, move_towards
from dungeonai.components import Actions, Team
from dungeonai.geometry import Position
from dungeonai.world import World


@pytest.mark.parametrize(
    "target, expected",
    [
        (Position(5, 1), Actions.MOVE_RIGHT),
        (Position(-5, 1), Actions.MOVE_LEFT),
        (Position(1, -5), Actions.MOVE_UP),
        (Position(1, 5), Actions.MOVE_DOWN),
    ],
)
def test_move_towards_picks_dominant_axis(target, expected):
    assert move_towards(Position(0, 0), target) == expected


def test_move_towards_prefers_vertical_on_tie():
    assert move_towards(Position(0, 0), Position(2, 2)) == Actions.MOVE_DOWN
    assert move_towards(Position(0, 0), Position(2, -2)) == Actions.MOVE_UP


def test_move_towards_same_cell_moves_down():
    assert move_towards(Position(3, 3), Position(3, 3)) == Actions.MOVE_DOWN


@pytest.mark.parametrize(
    "move", [Actions.MOVE_LEFT, Actions.MOVE_RIGHT, Actions.MOVE_UP, Actions.MOVE_DOWN]
)
def test_inverse_move_is_an_involution(move):
    assert inverse_move(move) != move
    assert inverse_move(inverse_move(move)) == move


def test_inverse_move_pairs():
    assert inverse_move(Actions.MOVE_LEFT) == Actions.MOVE_RIGHT
    assert inverse_move(Actions.MOVE_UP) == Actions.MOVE_DOWN


@pytest.mark.parametrize("action", [Actions.NOP, Actions.HEAL_SELF, Actions.PASS])
def test_inverse_move_keeps_non_moves(action):
    assert inverse_move(action) == action


def test_closest_enemy_ignores_allies_and_picks_nearest():
    world = World()
    me = world.spawn(Position(0, 0), Team(1))
    world.spawn(Position(1, 0), Team(1))
    far = world.spawn(Position(6, 0), Team(0))
    near = world.spawn(Position(0, 3), Team(0))
    found = closest_enemy(world, me)
    assert found == (near, Position(0, 3))
    world.destroy(near)
    assert closest_enemy(world, me) == (far, Position(6, 0))


def test_closest_enemy_none_without_enemies():
    world = World()
    me = world.spawn(Position(0, 0), Team(1))
    world.spawn(Position(2, 0), Team(1))
    assert closest_enemy(world, me) is None


def test_closest_enemy_needs_position_and_team():
    world = World()
    me = world.spawn(Position(0, 0))
    world.spawn(Position(2, 0), Team(0))
    assert closest_enemy(world, me) is None


def test_closest_enemy_first_found_wins_tie():
    world = World()
    me = world.spawn(Position(0, 0), Team(1))
    first = world.spawn(Position(2, 0), Team(0))
    world.spawn(Position(-2, 0), Team(0))
    assert closest_enemy(world, me)[0] is first