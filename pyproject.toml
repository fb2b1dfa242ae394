[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "waddle"
version = "0.1.0"
description = "Building blocks for versioned database schema migrations: SQL migration parsing, version resolution, dialect-aware version tables and session locking."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "database",
    "migrations",
    "schema",
    "sql",
    "postgres",
    "mysql",
    "sqlite",
]
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
    "Programming Language :: SQL",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["waddle"]

[tool.hatch.build.targets.sdist]
include = ["waddle", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
