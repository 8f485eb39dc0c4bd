"""Roguelike game AI: an entity store, state machines, behaviour trees, Dijkstra maps, dungeons, pathfinding and a terminal game."""

__version__ = "0.1.0"
__all__ = [
    "ai_utils",
    "behaviour",
    "blackboard",
    "cli",
    "components",
    "dmaps",
    "dungeon",
    "geometry",
    "pathfinding",
    "roguelike",
    "statemachine",
    "states",
    "world",
]