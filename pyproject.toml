[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cybertower"
version = "0.1.0"
description = "Game logic for a grid-based tower defense: maps, waves, turrets, effects, scoring and scene flow"
requires-python = ">=3.10"
dependencies = []
keywords = ["tower defense", "game", "pathfinding", "bfs", "scoreboard", "strategy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cybertower"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
