"""Command-line play of the dungeon roguelike in the terminal."""

from __future__ import annotations

import argparse
import random
import sys
from typing import TYPE_CHECKING, Optional, Sequence

from dungeonai.components import Actions, DungeonData, HealAmount, Hitpoints, Hive, IsPlayer, PowerupAmount
from dungeonai.dungeon import gen_drunk_dungeon
from dungeonai.geometry import Position
from dungeonai.roguelike import (
    PLAYER_NAME,
    init_dungeon,
    init_roguelike,
    print_stats,
    process_turn,
    set_player_action,
)
from dungeonai.world import World

if TYPE_CHECKING:
    pass

PLAYER_GLYPH = "@"
MONSTER_GLYPH = "M"
HIVE_GLYPH = "H"
HEAL_GLYPH = "+"
POWERUP_GLYPH = "*"

KEYS = {
    "h": Actions.MOVE_LEFT,
    "a": Actions.MOVE_LEFT,
    "l": Actions.MOVE_RIGHT,
    "d": Actions.MOVE_RIGHT,
    "k": Actions.MOVE_UP,
    "w": Actions.MOVE_UP,
    "j": Actions.MOVE_DOWN,
    "s": Actions.MOVE_DOWN,
    ".": Actions.PASS,
}


def render(world: World) -> str:
    """Draw the dungeon with its pick-ups and actors as text."""
    dungeon = world.single(DungeonData)
    if dungeon is None:
        raise LookupError("the world has no dungeon")
    grid = [list(row) for row in dungeon.rows()]

    def place(pos: Position, glyph: str) -> None:
        if 0 <= pos.x < dungeon.width and 0 <= pos.y < dungeon.height:
            grid[pos.y][pos.x] = glyph

    for _, pos, _ in world.query(Position, HealAmount):
        place(pos, HEAL_GLYPH)
    for _, pos, _ in world.query(Position, PowerupAmount):
        place(pos, POWERUP_GLYPH)
    for entity, pos, _ in world.query(Position, Hitpoints):
        if not entity.has(IsPlayer):
            place(pos, HIVE_GLYPH if entity.has(Hive) else MONSTER_GLYPH)
    for _, pos, _ in world.query(Position, IsPlayer):
        place(pos, PLAYER_GLYPH)
    return "\n".join("".join(row) for row in grid)


def _show(world: World) -> None:
    print(render(world))
    for line in print_stats(world):
        print(line)


def _play(world: World, action: Actions) -> bool:
    """Run one player action; tell whether the player is still alive."""
    if world.lookup(PLAYER_NAME) is None:
        return False
    set_player_action(world, action)
    process_turn(world)
    return world.lookup(PLAYER_NAME) is not None


def _unknown(keys: str) -> str:
    return "".join(sorted({key for key in keys if key not in KEYS}))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Generate a dungeon and play it from the given moves or from standard input."""
    parser = argparse.ArgumentParser(
        prog="dungeonai",
        description="Walk a generated dungeon with h/j/k/l (or a/s/w/d) and '.' to wait.",
    )
    parser.add_argument("--width", type=int, default=50, help="dungeon width in tiles")
    parser.add_argument("--height", type=int, default=50, help="dungeon height in tiles")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random generator")
    parser.add_argument("--moves", default=None, help="play these keys, print the result and exit")
    args = parser.parse_args(argv)

    if args.seed is not None:
        random.seed(args.seed)
    try:
        dungeon = gen_drunk_dungeon(args.width, args.height, rng=random.Random(args.seed))
    except ValueError as exc:
        parser.error(str(exc))

    world = World()
    init_dungeon(world, dungeon)
    try:
        init_roguelike(world)
    except ValueError as exc:
        parser.error(str(exc))

    if args.moves is not None:
        bad = _unknown(args.moves)
        if bad:
            parser.error(f"unknown move keys: {bad!r}")
        alive = True
        for key in args.moves:
            if not _play(world, KEYS[key]):
                alive = False
                break
        _show(world)
        if not alive:
            print("You died.")
        return 0

    _show(world)
    for line in sys.stdin:
        command = line.strip()
        if command in ("q", "quit"):
            break
        if not command:
            continue
        bad = _unknown(command)
        if bad:
            print(f"unknown command: {bad!r}")
            continue
        alive = all(_play(world, KEYS[key]) for key in command)
        _show(world)
        if not alive:
            print("You died.")
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())