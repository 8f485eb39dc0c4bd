[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dungeonai"
version = "0.1.0"
description = "Turn-based roguelike AI toolkit: state machines, behaviour trees, Dijkstra maps, dungeon generation and grid pathfinding"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "roguelike",
    "game-ai",
    "behaviour-tree",
    "state-machine",
    "dijkstra-map",
    "pathfinding",
    "a-star",
    "dungeon-generation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dungeonai = "dungeonai.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dungeonai"]

[tool.pytest.ini_options]
addopts = "-ra"
