import pytest

from dungeonai.components import (
    Action,
    ActionLog,
    Actions,
    DijkstraMapData,
    DmapWeights,
    DungeonData,
    Hitpoints,
    MeleeDamage,
    MovePos,
    NumActions,
    PatrolPos,
    PlayerInput,
    TurnCounter,
    WayPoint,
    WeightData,
)
from dungeonai.geometry import Position


def test_action_aliases_resolve_through_component():
    assert Action(Actions.MOVE_START).action == Actions.MOVE_LEFT
    assert Action(Actions.MOVE_END).action == Actions.ATTACK
    assert Actions(0) is Actions.NOP


def test_action_values_follow_source_order():
    assert [Actions(v) for v in range(1, 5)] == [
        Actions.MOVE_LEFT,
        Actions.MOVE_RIGHT,
        Actions.MOVE_DOWN,
        Actions.MOVE_UP,
    ]
    assert Actions(5) is Actions.ATTACK
    assert Actions(6) is Actions.HEAL_SELF
    assert Actions(7) is Actions.PASS
    assert Actions(8) is Actions.NUM


def test_move_pos_equals_position():
    assert MovePos(3, -1) == Position(3, -1)
    assert Position(3, -1) == MovePos(3, -1)
    assert PatrolPos(2, 2) == MovePos(2, 2)
    assert MovePos(1, 2) != Position(2, 1)


def test_move_pos_hashes_like_position():
    assert {MovePos(4, 5)} == {Position(4, 5)}


def test_move_pos_repr_names_class():
    assert repr(MovePos(1, 2)).startswith("MovePos(")


def test_defaults_match_source():
    assert Hitpoints().hitpoints == 10.0
    assert MeleeDamage().damage == 2.0
    assert Action().action == Actions.NOP
    assert NumActions().num_actions == 1 and NumActions().cur_actions == 0
    assert TurnCounter().count == 0
    assert WeightData().mult == 1.0 and WeightData().power == 1.0


def test_player_input_defaults_all_released():
    inp = PlayerInput()
    assert (inp.left, inp.right, inp.up, inp.down, inp.passed) == (False, False, False, False, False)


def test_action_log_keeps_latest_messages():
    log = ActionLog()
    messages = [f"msg {i}" for i in range(8)]
    for m in messages:
        log.push(m)
    assert log.log == messages[-log.capacity:]


def test_action_log_under_capacity_keeps_all():
    log = ActionLog(capacity=3)
    log.push("a")
    log.push("b")
    assert log.log == ["a", "b"]


def test_action_log_instances_do_not_share_lists():
    a = ActionLog()
    b = ActionLog()
    a.push("x")
    assert b.log == []


def test_dmap_weights_instances_independent():
    a = DmapWeights()
    a.weights["approach_map"] = WeightData()
    assert DmapWeights().weights == {}
    assert DijkstraMapData().values == []


def test_dungeon_tile_and_rows():
    rows = ["###", "# #", "###"]
    dungeon = DungeonData(list("".join(rows)), 3, 3)
    assert list(dungeon.rows()) == rows
    assert dungeon.tile(1, 1) == " "
    assert dungeon.tile(0, 1) == "#"


def test_dungeon_accepts_string_tiles_and_stores_list():
    dungeon = DungeonData("ab" "cd", 2, 2)
    assert dungeon.tiles == ["a", "b", "c", "d"]
    assert dungeon.tile(0, 1) == "c"


def test_dungeon_wrong_tile_count_raises():
    with pytest.raises(ValueError):
        DungeonData(list("####"), 3, 3)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_dungeon_tile_out_of_bounds(x, y):
    dungeon = DungeonData(list("######"), 3, 2)
    with pytest.raises(IndexError):
        dungeon.tile(x, y)


def test_waypoint_links():
    last = WayPoint()
    first = WayPoint(next=last)
    assert first.next is last
    assert last.next is None