"""Decide which migration versions still need to be applied."""

from __future__ import annotations

from typing import Iterable, List, Optional

_MAX_INT64 = 2**63 - 1


class MissingMigrationsError(ValueError):
    """Raised when migrations older than the database version were never applied."""

    def __init__(self, missing: Iterable[int], db_max_version: int, target: int) -> None:
        self.missing = sorted(missing)
        self.db_max_version = db_max_version
        self.target = target
        count = len(self.missing)
        noun = "migrations" if count > 1 else "migration"
        joined = ",".join(str(v) for v in self.missing)
        versions = f"versions {joined}" if count > 1 else f"version {joined}"
        desired = f"database version ({db_max_version})"
        if target != _MAX_INT64:
            desired += f", with target version ({target})"
        super().__init__(
            f"detected {count} missing (out-of-order) {noun} lower than {desired}: {versions}"
        )


def up_versions(
    fsys_versions: Optional[Iterable[int]],
    db_versions: Optional[Iterable[int]],
    target: int = _MAX_INT64,
    allow_missing: bool = False,
) -> List[int]:
    """Return, in ascending order, the versions to apply up to and including *target*.

    A version is missing when it is known on disk, not applied, and lower than the
    highest applied version. Missing versions raise MissingMigrationsError unless
    *allow_missing* is set, in which case they are included.
    """
    fsys = sorted(fsys_versions or ())
    applied = set(db_versions or ())
    db_max = max((v for v in applied if v > 0), default=0)

    pending = [v for v in fsys if v not in applied]
    missing = [v for v in pending if v < db_max and v <= target]
    if missing and not allow_missing:
        raise MissingMigrationsError(missing, db_max, target)

    new = [v for v in pending if db_max < v <= target]
    return sorted(missing + new)