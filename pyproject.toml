[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kxo"
version = "0.1.0"
description = "Self-playing tic-tac-toe engine with MCTS and negamax players and a terminal viewer"
requires-python = ">=3.10"
dependencies = []
keywords = ["tic-tac-toe", "mcts", "negamax", "game", "ai", "zobrist"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xo-user = "kxo.client:main"

[tool.hatch.build.targets.wheel]
packages = ["kxo"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
