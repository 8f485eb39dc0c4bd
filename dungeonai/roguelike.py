"""Turn processing for the dungeon roguelike: spawning, actions, pick-ups and sensors."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from dungeonai.behaviour import BehaviourTree
from dungeonai.blackboard import Blackboard
from dungeonai.components import (
    Action,
    ActionLog,
    Actions,
    DijkstraMapData,
    DmapWeights,
    DungeonData,
    HealAmount,
    Hitpoints,
    Hive,
    IsPlayer,
    MeleeDamage,
    MovePos,
    NumActions,
    PlayerInput,
    PowerupAmount,
    Team,
    TurnCounter,
    WeightData,
    WorldInfoGatherer,
)
from dungeonai.dmaps import (
    gen_hive_pack_map,
    gen_player_approach_map,
    gen_player_flee_map,
    process_dmap_followers,
)
from dungeonai.dungeon import FLOOR, is_tile_walkable
from dungeonai.geometry import Position, dist, dist_sq, sqr
from dungeonai.statemachine import StateMachine

if TYPE_CHECKING:
    from dungeonai.world import Entity, World

PLAYER_NAME = "player"
WORLD_NAME = "world"
DUNGEON_NAME = "dungeon"
APPROACH_MAP = "approach_map"
FLEE_MAP = "flee_map"
HIVE_MAP = "hive_map"

PLAYER_TEAM = 0
MONSTER_TEAM = 1
START_HITPOINTS = 100.0
START_DAMAGE = 20.0
SELF_HEAL_AMOUNT = 10.0
ALLY_RADIUS = 5.0
NO_ENEMY_DIST = 100.0


def init_dungeon(world: World, dungeon: DungeonData) -> Entity:
    """Store a copy of ``dungeon`` in the world under the name ``dungeon``."""
    return world.entity(DUNGEON_NAME).set(
        DungeonData(list(dungeon.tiles), dungeon.width, dungeon.height)
    )


def _find_free_dungeon_tile(world: World) -> Position:
    dungeon = world.single(DungeonData)
    if dungeon is None:
        raise LookupError("the world has no dungeon; call init_dungeon first")
    occupied = {Position(p.x, p.y) for _, p, _ in world.query(Position, Hitpoints)}
    free = [
        pos
        for index, tile in enumerate(dungeon.tiles)
        if tile == FLOOR
        and (pos := Position(index % dungeon.width, index // dungeon.width)) not in occupied
    ]
    if not free:
        raise ValueError("no free floor tile is left in the dungeon")
    return random.choice(free)


def _create_monster(world: World) -> Entity:
    pos = _find_free_dungeon_tile(world)
    return world.spawn(
        Position(pos.x, pos.y),
        MovePos(pos.x, pos.y),
        Hitpoints(START_HITPOINTS),
        Action(Actions.NOP),
        StateMachine(),
        Team(MONSTER_TEAM),
        NumActions(1, 0),
        MeleeDamage(START_DAMAGE),
        Blackboard(),
    )


def _create_player(world: World) -> Entity:
    pos = _find_free_dungeon_tile(world)
    return world.spawn(
        Position(pos.x, pos.y),
        MovePos(pos.x, pos.y),
        Hitpoints(START_HITPOINTS),
        Action(Actions.NOP),
        IsPlayer(),
        Team(PLAYER_TEAM),
        PlayerInput(),
        NumActions(2, 0),
        MeleeDamage(START_DAMAGE),
        name=PLAYER_NAME,
    )


def init_roguelike(world: World) -> Entity:
    """Place the hive pack, its hive and the player on free floor tiles.

    The world's dungeon must already be set. Returns the player entity.
    """
    for _ in range(3):
        _create_monster(world).set(
            DmapWeights({HIVE_MAP: WeightData(1.0, 1.0), APPROACH_MAP: WeightData(1.8, 0.8)})
        )
    _create_monster(world).set(DmapWeights({FLEE_MAP: WeightData(1.0, 1.0)}), Hive())
    player = _create_player(world)
    world.entity(WORLD_NAME).set(TurnCounter(), ActionLog())
    return player


def set_player_action(world: World, action: int) -> None:
    """Plan ``action`` for the player's next turn."""
    planned = Actions(action)
    found = False
    for _, _, current in world.query(IsPlayer, Action):
        current.action = planned
        found = True
    if not found:
        raise LookupError("the world has no player")


def _is_player_acted(world: World) -> bool:
    acted = False
    for _, _, action in world.query(IsPlayer, Action):
        acted = action.action != Actions.NOP
    return acted


def _upd_player_actions_count(world: World) -> bool:
    reached = False
    for _, _, counter in world.query(IsPlayer, NumActions):
        counter.cur_actions = (counter.cur_actions + 1) % counter.num_actions
        reached |= counter.cur_actions == 0
    return reached


def _move_pos(pos: Position, action: int) -> Position:
    if action == Actions.MOVE_LEFT:
        return Position(pos.x - 1, pos.y)
    if action == Actions.MOVE_RIGHT:
        return Position(pos.x + 1, pos.y)
    if action == Actions.MOVE_UP:
        return Position(pos.x, pos.y - 1)
    if action == Actions.MOVE_DOWN:
        return Position(pos.x, pos.y + 1)
    return Position(pos.x, pos.y)


def _push_to_log(world: World, message: str) -> None:
    for _, log, counter in world.query(ActionLog, TurnCounter):
        log.push(f"{counter.count}: {message}")


def _process_actions(world: World) -> None:
    for _, action, hp in world.query(Action, Hitpoints):
        if action.action != Actions.HEAL_SELF:
            continue
        action.action = Actions.NOP
        _push_to_log(world, "Monster healed itself")
        hp.hitpoints += SELF_HEAL_AMOUNT

    dungeon = world.single(DungeonData)
    actors = (Action, Position, MovePos, MeleeDamage, Team)
    for entity, action, pos, _, damage, team in world.query(*actors):
        next_pos = _move_pos(pos, action.action)
        blocked = dungeon is None or not is_tile_walkable(dungeon, next_pos)
        for other, other_move, other_hp, other_team in world.query(MovePos, Hitpoints, Team):
            if other is entity or other_move != next_pos:
                continue
            blocked = True
            if team.team != other_team.team:
                _push_to_log(world, "damaged entity")
                other_hp.hitpoints -= damage.damage
        if blocked:
            action.action = Actions.NOP
        else:
            entity.set(MovePos(next_pos.x, next_pos.y))

    for entity, action, _, move, _, _ in world.query(*actors):
        entity.set(Position(move.x, move.y))
        action.action = Actions.NOP

    for entity, hp in world.query(Hitpoints):
        if hp.hitpoints <= 0.0:
            world.destroy(entity)

    for _, _, pos, hp, damage in world.query(IsPlayer, Position, Hitpoints, MeleeDamage):
        for item, item_pos, heal in world.query(Position, HealAmount):
            if item_pos == pos:
                hp.hitpoints += heal.amount
                world.destroy(item)
        for item, item_pos, power in world.query(Position, PowerupAmount):
            if item_pos == pos:
                damage.damage += power.amount
                world.destroy(item)


def _gather_world_info(world: World) -> None:
    sensors = (Blackboard, Position, Hitpoints, WorldInfoGatherer, Team)
    for _, board, pos, hp, _, team in world.query(*sensors):
        board.set("hp", hp.hitpoints)
        allies = 0.0
        closest = NO_ENEMY_DIST
        for _, other_pos, other_team in world.query(Position, Team):
            if team.team == other_team.team:
                if dist_sq(pos, other_pos) < sqr(ALLY_RADIUS):
                    allies += 1.0
            else:
                closest = min(closest, dist(pos, other_pos))
        board.set("alliesNum", allies)
        board.set("enemyDist", closest)


def process_turn(world: World) -> bool:
    """Run one turn if the player has planned an action.

    Non-player actors plan only once the player has used up its actions
    for the round. Returns whether a turn was run.
    """
    if not _is_player_acted(world):
        return False
    if _upd_player_actions_count(world):
        _gather_world_info(world)
        for entity, machine in world.query(StateMachine):
            machine.act(0.0, world, entity)
        for entity, tree, board in world.query(BehaviourTree, Blackboard):
            tree.update(world, entity, board)
        process_dmap_followers(world)
        for _, counter in world.query(TurnCounter):
            counter.count += 1
    _process_actions(world)

    world.entity(APPROACH_MAP).set(DijkstraMapData(gen_player_approach_map(world)))
    world.entity(FLEE_MAP).set(DijkstraMapData(gen_player_flee_map(world)))
    world.entity(HIVE_MAP).set(DijkstraMapData(gen_hive_pack_map(world)))
    return True


def print_stats(world: World) -> list[str]:
    """Return the player's stats followed by the action log, oldest first."""
    lines: list[str] = []
    for _, _, hp, damage in world.query(IsPlayer, Hitpoints, MeleeDamage):
        lines.append(f"hp: {int(hp.hitpoints)}")
        lines.append(f"power: {int(damage.damage)}")
    for _, log in world.query(ActionLog):
        lines.extend(log.log)
    return lines