"""Migration collection, ordering and database version lookup."""

from __future__ import annotations

import fnmatch
import os
import posixpath
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

MAX_VERSION = 2**63 - 1
DEFAULT_TABLE_NAME = "goose_db_version"

_MIN_INT64 = -(2**63)
_INT_RE = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MigrateError(Exception):
    """Base class for migration errors."""


class NoMigrationFilesError(MigrateError):
    """No migration files were found."""

    def __init__(self, message: str = "no migration files found") -> None:
        super().__init__(message)


class NoCurrentVersionError(MigrateError):
    """The current migration version was not found."""

    def __init__(self, message: str = "no current version found") -> None:
        super().__init__(message)


class NoNextVersionError(MigrateError):
    """The next migration version was not found."""

    def __init__(self, message: str = "no next version found") -> None:
        super().__init__(message)


class DuplicateVersionError(MigrateError):
    """Two migrations share a version."""


@dataclass
class Migration:
    """A single migration known by its version and source file."""

    version: int
    source: str = ""
    next: int = -1
    previous: int = -1
    registered: bool = False

    def __str__(self) -> str:
        return self.source


def numeric_component(filename: Union[str, os.PathLike]) -> int:
    """Return the version prefix of a ``.sql`` or ``.go`` migration file name."""
    base = os.path.basename(os.fspath(filename))
    dot = base.rfind(".")
    ext = base[dot:] if dot >= 0 else ""
    if ext not in (".go", ".sql"):
        raise ValueError("not a recognized migration file type")
    idx = base.find("_")
    if idx < 0:
        raise ValueError("no filename separator '_' found")
    prefix = base[:idx]
    if not _INT_RE.fullmatch(prefix):
        raise ValueError(f"invalid version number {prefix!r}")
    number = int(prefix)
    if not _MIN_INT64 <= number <= MAX_VERSION:
        raise ValueError(f"version number {prefix!r} out of range")
    if number < 1:
        raise ValueError("migration IDs must be greater than zero")
    return number


def _parse_timestamp(version: int) -> Optional[datetime]:
    text = str(version)
    if len(text) != 14 or not (text.isascii() and text.isdigit()):
        return None
    try:
        return datetime(
            int(text[0:4]),
            int(text[4:6]),
            int(text[6:8]),
            int(text[8:10]),
            int(text[10:12]),
            int(text[12:14]),
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


class Migrations(List[Migration]):
    """An ordered list of migrations."""

    def current(self, current: int) -> Migration:
        """Return the migration with version *current*."""
        for migration in self:
            if migration.version == current:
                return migration
        raise NoCurrentVersionError()

    def next(self, current: int) -> Migration:
        """Return the first migration with a version above *current*."""
        for migration in self:
            if migration.version > current:
                return migration
        raise NoNextVersionError()

    def previous(self, current: int) -> Migration:
        """Return the last migration with a version below *current*."""
        for migration in reversed(self):
            if migration.version < current:
                return migration
        raise NoNextVersionError()

    def last(self) -> Migration:
        """Return the last migration."""
        if not self:
            raise NoNextVersionError()
        return self[-1]

    def versioned(self) -> "Migrations":
        """Migrations whose versions are not timestamps after the epoch."""
        result = Migrations()
        for migration in self:
            stamp = _parse_timestamp(migration.version)
            if stamp is None or stamp < _EPOCH:
                result.append(migration)
        return result

    def timestamped(self) -> "Migrations":
        """Migrations whose versions are timestamps after the epoch."""
        result = Migrations()
        for migration in self:
            stamp = _parse_timestamp(migration.version)
            if stamp is not None and stamp > _EPOCH:
                result.append(migration)
        return result

    def __str__(self) -> str:
        return "".join(f"{m}\n" for m in self)


def version_filter(v: int, current: int, target: int) -> bool:
    """Whether *v* lies between *current* and *target* in the direction of travel."""
    if target > current:
        return current < v <= target
    if target < current:
        return target < v <= current
    return False


def sort_and_connect_migrations(migrations: Iterable[Migration]) -> Migrations:
    """Sort by version and link each migration to its neighbours."""
    ordered = Migrations(sorted(migrations, key=lambda m: m.version))
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.version == cur.version:
            raise DuplicateVersionError(
                f"duplicate version {cur.version} detected:\n{prev.source}\n{cur.source}"
            )
    for i, migration in enumerate(ordered):
        migration.previous = -1
        if i > 0:
            migration.previous = ordered[i - 1].version
            ordered[i - 1].next = migration.version
    return ordered


def _glob(root: Path, dirpath: str, pattern: str) -> List[str]:
    directory = root / dirpath
    if not directory.is_dir():
        return []
    clean = posixpath.normpath(dirpath) if dirpath else "."
    names = sorted(n for n in os.listdir(directory) if fnmatch.fnmatchcase(n, pattern))
    return [name if clean == "." else f"{clean}/{name}" for name in names]


def _collect_go_migrations(
    root: Path,
    dirpath: str,
    registered: Mapping[int, Migration],
    current: int,
    target: int,
) -> List[Migration]:
    for migration in registered.values():
        try:
            numeric_component(migration.source)
        except ValueError as exc:
            raise MigrateError(
                f"could not parse go migration file {migration.source}: {exc}"
            ) from exc
    go_files = _glob(root, dirpath, "*.go")
    if not go_files and not registered:
        return []

    sources = []
    for fullpath in go_files:
        try:
            version = numeric_component(fullpath)
        except ValueError:
            continue
        if fullpath.endswith("_test.go"):
            continue
        if version_filter(version, current, target):
            sources.append((fullpath, version))

    if sources:
        return [
            registered.get(version) or Migration(version=version, source=fullpath)
            for fullpath, version in sources
        ]
    # Migrations registered without a matching file on disk are taken as they are.
    return [
        m
        for m in registered.values()
        if version_filter(numeric_component(m.source), current, target)
    ]


def collect_migrations(
    root: Union[str, os.PathLike],
    dirpath: str,
    current: int,
    target: int,
    registered: Optional[Mapping[int, Migration]] = None,
) -> Migrations:
    """Collect SQL files and Go migrations under *root*/*dirpath* in the version range."""
    base = Path(root)
    if not (base / dirpath).exists():
        raise MigrateError(f"{dirpath} directory does not exist")
    found: List[Migration] = []
    for file in _glob(base, dirpath, "*.sql"):
        try:
            version = numeric_component(file)
        except ValueError as exc:
            raise MigrateError(f'could not parse SQL migration file "{file}": {exc}') from exc
        if version_filter(version, current, target):
            found.append(Migration(version=version, source=file))
    found.extend(_collect_go_migrations(base, dirpath, dict(registered or {}), current, target))
    if not found:
        raise NoMigrationFilesError()
    return sort_and_connect_migrations(found)


def _rollback(conn: Any) -> None:
    rollback = getattr(conn, "rollback", None)
    if rollback is None:
        return
    try:
        rollback()
    except Exception:
        pass


def _create_version_table(conn: Any, store: Any, table_name: str) -> None:
    try:
        store.create_version_table(conn, table_name)
        store.insert_version(conn, table_name, 0)
    except Exception:
        _rollback(conn)
        raise
    conn.commit()


def ensure_db_version(conn: Any, store: Any, table_name: str = DEFAULT_TABLE_NAME) -> int:
    """Return the current database version, creating the version table if needed."""
    try:
        records = store.list_migrations(conn, table_name)
    except Exception:
        _rollback(conn)
        _create_version_table(conn, store, table_name)
        return 0
    # The newest record of each version says whether it is applied.
    skipped: Dict[int, None] = {}
    for record in records:
        if record.version_id in skipped:
            continue
        if record.is_applied:
            return record.version_id
        skipped[record.version_id] = None
    raise NoNextVersionError()


def get_db_version(conn: Any, store: Any, table_name: str = DEFAULT_TABLE_NAME) -> int:
    """Alias of ensure_db_version."""
    return ensure_db_version(conn, store, table_name)