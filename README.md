# dungeonai

A small toolkit for the AI of turn-based roguelike games on a tile grid,
with a playable terminal game built from it. It needs nothing beyond the
standard library.

## What is inside

- `dungeonai.geometry`: `Position` (an integer grid cell) and the helpers
  `sqr`, `dist_sq` and `dist`.
- `dungeonai.world`: a lightweight entity/component store. `World.spawn`,
  `World.entity` (get or create by name), `World.lookup`, `World.destroy`,
  `World.query(*types)` yielding `(entity, component, ...)` tuples and
  `World.single(type)`; `Entity.get`, `set`, `has`, `remove` and `alive`.
- `dungeonai.components`: the game components (`Hitpoints`, `Action`, `Team`,
  `MovePos`, `PatrolPos`, `MeleeDamage`, `HealAmount`, `PowerupAmount`,
  `DungeonData`, `DmapWeights`, `WeightData`, `ActionLog`, `TurnCounter`,
  `WayPoint`, the tags `IsPlayer`, `Hive`, `WorldInfoGatherer`,
  `IsPickUpper`, ...) and the `Actions` enum.
- `dungeonai.blackboard`: `Blackboard`, a store of named values with
  `register`, `set` and `get`.
- `dungeonai.statemachine`: `State`, `StateTransition` and `StateMachine`
  (`add_state`, `add_transition`, `act`; the first available transition of
  the current state wins).
- `dungeonai.states`: ready-made states (`MoveToEnemyState`,
  `FleeFromEnemyState`, `PatrolState`, `AttackEnemyState`, `NopState`) and
  transitions (`EnemyAvailableTransition`, `HitpointsLessThanTransition`,
  `EnemyReachableTransition`, `NegateTransition`, `AndTransition`).
- `dungeonai.ai_utils`: `move_towards`, `inverse_move` and `closest_enemy`.
- `dungeonai.behaviour`: behaviour trees. `BehResult`, the composites
  `Sequence`, `Selector`, `Parallel`, `UtilitySelector` and `Not`, the leaves
  `FindEnemy`, `MoveToEntity`, `Flee`, `Patrol`, `IsLowHp`, `PatchUp`,
  `FindPickUp` and `NextWaypoint`, and `BehaviourTree` holding the root.
- `dungeonai.dungeon`: drunkard's-walk dungeon generation
  (`gen_drunk_dungeon`), water spilling (`spill_drunk_water`),
  `find_walkable_tile` and `is_tile_walkable`. Tiles are `WALL` (`#`),
  `FLOOR` (space) and `WATER` (`o`).
- `dungeonai.dmaps`: Dijkstra maps (`gen_player_approach_map`,
  `gen_player_flee_map`, `gen_hive_pack_map`, `process_dmap`) and
  `process_dmap_followers`, which picks each follower's step by the lowest
  weighted sum of its named maps.
- `dungeonai.pathfinding`: `find_path_a_star`, `find_ida_star_path` and
  `find_path_ara_star` over a `DungeonData`, plus the straight-line
  `heuristic`. Walls cannot be entered, water costs 10 and floor costs 1.
  Paths run from start to goal inclusive; an empty list means no path.
- `dungeonai.roguelike`: a turn loop built from the above: `init_dungeon`,
  `init_roguelike`, `set_player_action`, `process_turn` and `print_stats`.
- `dungeonai.cli`: the terminal game (`render` draws a world as text,
  `main` runs it).

## Installation

```
pip install .
```

## Playing

```
dungeonai
```

This generates a dungeon, places four monsters and the player on free floor
tiles, and prints the map followed by the player's hitpoints, power and the
recent action log. Then type moves, one or more keys per line:

- `h` or `a`: left, `l` or `d`: right, `k` or `w`: up, `j` or `s`: down
- `.`: wait
- `q` or `quit`: leave

On the map `@` is the player, `M` a monster, `H` the hive monster, `+` a
heal, `*` a power-up and `#` a wall. Stepping into an actor of the other
team hits it; actors at zero hitpoints are removed. The player acts twice
for each round of monster moves. Three monsters gather around the hive
while closing in on the player; the hive monster itself keeps away from
the player.

Options:

- `--width`, `--height`: dungeon size in tiles (default 50 by 50)
- `--seed`: seed for the random generator, for repeatable games
- `--moves KEYS`: play these keys, print the result and exit

## Using the library

Pathfinding on a generated dungeon:

```python
import random

from dungeonai.dungeon import gen_drunk_dungeon, find_walkable_tile
from dungeonai.pathfinding import find_path_a_star

rng = random.Random(1)
dungeon = gen_drunk_dungeon(40, 40, 4, 200, rng, True)
start = find_walkable_tile(dungeon, rng)
goal = find_walkable_tile(dungeon, rng)
path = find_path_a_star(dungeon, start, goal, 1.0)
```

A behaviour tree for a monster that flees when hurt, attacks when close and
otherwise patrols:

```python
from dungeonai.behaviour import (
    BehaviourTree, FindEnemy, Flee, IsLowHp, MoveToEntity, Patrol, Selector, Sequence,
)
from dungeonai.blackboard import Blackboard
from dungeonai.components import Action, Hitpoints, Team
from dungeonai.geometry import Position
from dungeonai.world import World

world = World()
monster = world.spawn(Position(5, 5), Team(1), Hitpoints(100.0), Action(), Blackboard())
world.spawn(Position(6, 5), Team(0), Hitpoints(100.0))

tree = BehaviourTree(
    Selector([
        Sequence([IsLowHp(50.0), FindEnemy(monster, 4.0, "flee_enemy"), Flee(monster, "flee_enemy")]),
        Sequence([FindEnemy(monster, 3.0, "attack_enemy"), MoveToEntity(monster, "attack_enemy")]),
        Patrol(monster, 2.0, "patrol_pos"),
    ])
)
tree.update(world, monster, monster.get(Blackboard))
print(monster.get(Action).action)  # Actions.MOVE_RIGHT
```

## What it does not do

The game is drawn as plain text in the terminal: there is no graphical
window, no textures, no hitpoint bars and no on-screen display of Dijkstra
map values. The pathfinding functions return paths as lists; there is no
interactive viewer for editing a grid and watching a search.
`init_roguelike` places no heals or power-ups and gives monsters no state
machine or behaviour tree, though the turn loop runs them for any entity
that has them.

## Running the tests

```
pip install .[test]
pytest
```