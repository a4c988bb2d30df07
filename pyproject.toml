[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shapefusion"
version = "0.7.0"
description = "File-format detection and browser models for an editor of Marathon shapes, sounds and physics files"
requires-python = ">=3.10"
dependencies = []
keywords = ["marathon", "aleph-one", "shapes", "physics", "game-data", "editor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shapefusion"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
