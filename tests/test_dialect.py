import sqlite3

import pytest

from waddle import dialectquery
from waddle.dialect import (
    Dialect,
    GetMigrationResult,
    ListMigrationsResult,
    Store,
    new_store,
)

TABLE = "goose_db_version"


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def store(conn):
    s = new_store(Dialect.SQLITE3)
    s.create_version_table(conn, TABLE)
    return s


@pytest.mark.parametrize(
    "dialect, querier_cls",
    [
        (Dialect.POSTGRES, dialectquery.Postgres),
        (Dialect.MYSQL, dialectquery.Mysql),
        (Dialect.SQLITE3, dialectquery.Sqlite3),
        (Dialect.SQLSERVER, dialectquery.Sqlserver),
        (Dialect.REDSHIFT, dialectquery.Redshift),
        (Dialect.TIDB, dialectquery.Tidb),
        (Dialect.CLICKHOUSE, dialectquery.Clickhouse),
        (Dialect.VERTICA, dialectquery.Vertica),
        (Dialect.YDB, dialectquery.Ydb),
        (Dialect.TURSO, dialectquery.Turso),
    ],
)
def test_new_store_picks_querier(dialect, querier_cls):
    assert type(new_store(dialect).querier) is querier_cls


def test_new_store_accepts_string():
    querier = new_store("postgres").querier
    assert querier.delete_version("t") == "DELETE FROM t WHERE version_id=$1"
    assert querier.insert_version("t") == "INSERT INTO t (version_id, is_applied) VALUES ($1, $2)"


def test_new_store_unknown_dialect():
    with pytest.raises(ValueError, match="unknown querier dialect: oracle"):
        new_store("oracle")


def test_list_empty_table(conn, store):
    assert store.list_migrations(conn, TABLE) == []


def test_insert_and_list_newest_first(conn, store):
    store.insert_version(conn, TABLE, 1)
    store.insert_version(conn, TABLE, 2)
    assert store.list_migrations(conn, TABLE) == [
        ListMigrationsResult(version_id=2, is_applied=True),
        ListMigrationsResult(version_id=1, is_applied=True),
    ]


def test_delete_version(conn, store):
    store.insert_version(conn, TABLE, 1)
    store.insert_version(conn, TABLE, 2)
    store.delete_version(conn, TABLE, 2)
    assert [m.version_id for m in store.list_migrations(conn, TABLE)] == [1]


def test_get_migration(conn, store):
    store.insert_version(conn, TABLE, 7)
    result = store.get_migration(conn, TABLE, 7)
    assert isinstance(result, GetMigrationResult)
    assert result.is_applied is True
    assert result.timestamp


def test_get_migration_missing(conn, store):
    with pytest.raises(LookupError):
        store.get_migration(conn, TABLE, 42)


def test_errors_pass_through(conn):
    s = Store(dialectquery.Sqlite3())
    with pytest.raises(sqlite3.OperationalError):
        s.list_migrations(conn, "no_such_table")


def test_create_twice_fails(conn, store):
    with pytest.raises(sqlite3.OperationalError):
        store.create_version_table(conn, TABLE)