"""Settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

DEFAULT_MIGRATION_DIR = "."


@dataclass(frozen=True)
class EnvVar:
    """An environment variable NAME=VALUE."""

    name: str
    value: str


def env_or(key: str, default: str) -> str:
    """Return the variable *key*, or *default* when it is unset or empty."""
    return os.environ.get(key, "") or default


def list_vars() -> List[EnvVar]:
    """Return the recognised environment variables with their effective values."""
    return [
        EnvVar("GOOSE_DRIVER", env_or("GOOSE_DRIVER", "")),
        EnvVar("GOOSE_DBSTRING", env_or("GOOSE_DBSTRING", "")),
        EnvVar("GOOSE_MIGRATION_DIR", env_or("GOOSE_MIGRATION_DIR", DEFAULT_MIGRATION_DIR)),
        EnvVar("NO_COLOR", env_or("NO_COLOR", "false")),
    ]