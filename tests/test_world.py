import pytest

from dungeonai.components import Hitpoints, IsPlayer, Team
from dungeonai.geometry import Position
from dungeonai.world import World


@pytest.fixture
def world():
    return World()


def test_spawn_and_get(world):
    e = world.spawn(Position(1, 2), Hitpoints(50.0))
    assert e.get(Position) == Position(1, 2)
    assert e.get(Hitpoints).hitpoints == 50.0
    assert e.get(Team) is None


def test_set_replaces_and_chains(world):
    e = world.spawn(Team(0))
    assert e.set(Team(1)) is e
    assert e.get(Team).team == 1


def test_has_requires_all(world):
    e = world.spawn(Position(), IsPlayer())
    assert e.has(Position, IsPlayer)
    assert not e.has(Position, Team)
    assert e.has()


def test_remove_returns_component(world):
    e = world.spawn(Team(3))
    removed = e.remove(Team)
    assert removed == Team(3)
    assert not e.has(Team)
    assert e.remove(Team) is None


def test_destroy_kills_entity(world):
    e = world.spawn(Position())
    assert e.alive()
    world.destroy(e)
    assert not e.alive()
    assert not world.is_alive(e)
    assert list(world.query(Position)) == []
    world.destroy(e)
    assert len(world) == 0


def test_is_alive_none(world):
    assert world.is_alive(None) is False


def test_entity_from_other_world_not_alive(world):
    other = World()
    e = other.spawn()
    assert not world.is_alive(e)


def test_named_entity_get_or_create(world):
    a = world.entity("player")
    b = world.entity("player")
    assert a is b
    assert world.lookup("player") is a
    assert world.lookup("missing") is None


def test_spawn_with_existing_name_sets_components(world):
    a = world.spawn(Team(0), name="hero")
    b = world.spawn(Position(4, 4), name="hero")
    assert a is b
    assert a.has(Team, Position)


def test_destroy_frees_name(world):
    a = world.entity("map")
    world.destroy(a)
    assert world.lookup("map") is None
    b = world.entity("map")
    assert b is not a and b.alive()


def test_query_filters_and_keeps_order(world):
    a = world.spawn(Position(0, 0), Team(0))
    world.spawn(Position(1, 1))
    c = world.spawn(Team(1), Position(2, 2))
    rows = list(world.query(Position, Team))
    assert [r[0] for r in rows] == [a, c]
    assert rows[1][1:] == (Position(2, 2), Team(1))


def test_query_skips_entities_destroyed_during_iteration(world):
    entities = [world.spawn(Hitpoints(1.0)) for _ in range(4)]
    seen = []
    for entity, _ in world.query(Hitpoints):
        seen.append(entity)
        for other in entities:
            if other is not entity:
                world.destroy(other)
    assert seen == entities[:1]


def test_query_sees_component_changes(world):
    e = world.spawn(Hitpoints(5.0))
    for _, hp in world.query(Hitpoints):
        hp.hitpoints -= 2.0
    assert e.get(Hitpoints).hitpoints == 5.0 - 2.0


def test_single(world):
    assert world.single(Team) is None
    world.spawn(Position())
    first = Team(7)
    world.spawn(first)
    world.spawn(Team(8))
    assert world.single(Team) is first


def test_iteration_and_len(world):
    a = world.spawn()
    b = world.spawn()
    assert list(world) == [a, b]
    assert len(world) == 2
    assert a.id != b.id