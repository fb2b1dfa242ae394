"""Database dialects and the store that manages the version table."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from . import dialectquery
from .dialectquery import Querier


class Dialect(str, enum.Enum):
    """Supported database dialects."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE3 = "sqlite3"
    SQLSERVER = "sqlserver"
    REDSHIFT = "redshift"
    TIDB = "tidb"
    CLICKHOUSE = "clickhouse"
    VERTICA = "vertica"
    YDB = "ydb"
    TURSO = "turso"

    def __str__(self) -> str:
        return self.value


_QUERIERS = {
    Dialect.POSTGRES: dialectquery.Postgres,
    Dialect.MYSQL: dialectquery.Mysql,
    Dialect.SQLITE3: dialectquery.Sqlite3,
    Dialect.SQLSERVER: dialectquery.Sqlserver,
    Dialect.REDSHIFT: dialectquery.Redshift,
    Dialect.TIDB: dialectquery.Tidb,
    Dialect.CLICKHOUSE: dialectquery.Clickhouse,
    Dialect.VERTICA: dialectquery.Vertica,
    Dialect.YDB: dialectquery.Ydb,
    Dialect.TURSO: dialectquery.Turso,
}


@dataclass(frozen=True)
class GetMigrationResult:
    """State of one version as recorded in the version table."""

    is_applied: bool
    timestamp: Any


@dataclass(frozen=True)
class ListMigrationsResult:
    """One row of the version table."""

    version_id: int
    is_applied: bool


def _run(conn: Any, query: str, params: Sequence[Any] = (), fetch: str = "") -> Any:
    """Execute *query* on a DB-API connection and optionally fetch results."""
    cursor = conn.cursor()
    try:
        cursor.execute(query, tuple(params))
        if fetch == "one":
            return cursor.fetchone()
        if fetch == "all":
            return cursor.fetchall()
        return None
    finally:
        close = getattr(cursor, "close", None)
        if close is not None:
            close()


class Store:
    """Runs the dialect's version-table queries on a DB-API connection.

    Database errors are passed through unchanged. Committing is left to the
    caller, so the same methods serve inside and outside a transaction.
    """

    def __init__(self, querier: Querier) -> None:
        self.querier = querier

    def create_version_table(self, conn: Any, table_name: str) -> None:
        """Create the version table."""
        _run(conn, self.querier.create_table(table_name))

    def insert_version(self, conn: Any, table_name: str, version: int) -> None:
        """Record *version* as applied."""
        _run(conn, self.querier.insert_version(table_name), (version, True))

    def delete_version(self, conn: Any, table_name: str, version: int) -> None:
        """Remove every record of *version*."""
        _run(conn, self.querier.delete_version(table_name), (version,))

    def get_migration(self, conn: Any, table_name: str, version: int) -> GetMigrationResult:
        """Return the latest record of *version*; LookupError when there is none."""
        row: Optional[Sequence[Any]] = _run(
            conn, self.querier.get_migration_by_version(table_name), (version,), fetch="one"
        )
        if row is None:
            raise LookupError(f"no rows in result set for version {version}")
        return GetMigrationResult(is_applied=bool(row[1]), timestamp=row[0])

    def list_migrations(self, conn: Any, table_name: str) -> List[ListMigrationsResult]:
        """Return all records, most recent first; empty when there are none."""
        rows = _run(conn, self.querier.list_migrations(table_name), fetch="all") or []
        return [
            ListMigrationsResult(version_id=int(row[0]), is_applied=bool(row[1]))
            for row in rows
        ]


def new_store(dialect: Union[Dialect, str]) -> Store:
    """Return a Store for *dialect*; ValueError for an unknown dialect."""
    try:
        key = Dialect(dialect)
    except ValueError:
        raise ValueError(f"unknown querier dialect: {dialect}") from None
    return Store(_QUERIERS[key]())