"""SQL statements for the version table, one set per database dialect."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Querier(ABC):
    """Builds the dialect-specific queries used to manage the version table."""

    @abstractmethod
    def create_table(self, table_name: str) -> str:
        """Query that creates the version table."""

    @abstractmethod
    def insert_version(self, table_name: str) -> str:
        """Query that inserts a version; takes version id and applied flag."""

    @abstractmethod
    def delete_version(self, table_name: str) -> str:
        """Query that deletes a version; takes the version id."""

    @abstractmethod
    def get_migration_by_version(self, table_name: str) -> str:
        """Query returning the timestamp and is_applied columns of one version."""

    @abstractmethod
    def list_migrations(self, table_name: str) -> str:
        """Query returning version_id and is_applied, newest first."""

    @abstractmethod
    def get_latest_version(self, table_name: str) -> str:
        """Query returning the highest version id, or NULL."""


class Postgres(Querier):
    """PostgreSQL queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid serial NOT NULL,\n"
            "\t\tversion_id bigint NOT NULL,\n"
            "\t\tis_applied boolean NOT NULL,\n"
            "\t\ttstamp timestamp NULL default now(),\n"
            "\t\tPRIMARY KEY(id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES ($1, $2)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=$1"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=$1 ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT max(version_id) FROM {table_name}"


class Mysql(Querier):
    """MySQL queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid serial NOT NULL,\n"
            "\t\tversion_id bigint NOT NULL,\n"
            "\t\tis_applied boolean NOT NULL,\n"
            "\t\ttstamp timestamp NULL default now(),\n"
            "\t\tPRIMARY KEY(id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=?"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=? ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"


class Sqlite3(Querier):
    """SQLite queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "\t\tversion_id INTEGER NOT NULL,\n"
            "\t\tis_applied INTEGER NOT NULL,\n"
            "\t\ttstamp TIMESTAMP DEFAULT (datetime('now'))\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=?"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=? ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"


class Turso(Sqlite3):
    """Turso (libSQL) queries; identical to SQLite."""


class Sqlserver(Querier):
    """Microsoft SQL Server queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid INT NOT NULL IDENTITY(1,1) PRIMARY KEY,\n"
            "\t\tversion_id BIGINT NOT NULL,\n"
            "\t\tis_applied BIT NOT NULL,\n"
            "\t\ttstamp DATETIME NULL DEFAULT CURRENT_TIMESTAMP\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (@p1, @p2)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=@p1"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT TOP 1 tstamp, is_applied FROM {table_name} "
            "WHERE version_id=@p1 ORDER BY tstamp DESC"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied FROM {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"


class Redshift(Querier):
    """Amazon Redshift queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid integer NOT NULL identity(1, 1),\n"
            "\t\tversion_id bigint NOT NULL,\n"
            "\t\tis_applied boolean NOT NULL,\n"
            "\t\ttstamp timestamp NULL default sysdate,\n"
            "\t\tPRIMARY KEY(id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES ($1, $2)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=$1"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=$1 ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT max(version_id) FROM {table_name}"


class Tidb(Querier):
    """TiDB queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid BIGINT UNSIGNED NOT NULL AUTO_INCREMENT UNIQUE,\n"
            "\t\tversion_id bigint NOT NULL,\n"
            "\t\tis_applied boolean NOT NULL,\n"
            "\t\ttstamp timestamp NULL default now(),\n"
            "\t\tPRIMARY KEY(id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=?"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=? ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"


class Clickhouse(Querier):
    """ClickHouse queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE IF NOT EXISTS {table_name} (\n"
            "\t\tversion_id Int64,\n"
            "\t\tis_applied UInt8,\n"
            "\t\tdate Date default now(),\n"
            "\t\ttstamp DateTime default now()\n"
            "\t  )\n"
            "\t  ENGINE = MergeTree()\n"
            "\t\tORDER BY (date)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES ($1, $2)"

    def delete_version(self, table_name: str) -> str:
        return (
            f"ALTER TABLE {table_name} DELETE WHERE version_id = $1 "
            "SETTINGS mutations_sync = 2"
        )

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id = $1 ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied FROM {table_name} ORDER BY version_id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT max(version_id) FROM {table_name}"


class Vertica(Querier):
    """Vertica queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tid identity(1,1) NOT NULL,\n"
            "\t\tversion_id bigint NOT NULL,\n"
            "\t\tis_applied boolean NOT NULL,\n"
            "\t\ttstamp timestamp NULL default now(),\n"
            "\t\tPRIMARY KEY(id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id=?"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=? ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return f"SELECT version_id, is_applied from {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"


class Ydb(Querier):
    """YDB queries."""

    def create_table(self, table_name: str) -> str:
        return (
            f"CREATE TABLE {table_name} (\n"
            "\t\tversion_id Uint64,\n"
            "\t\tis_applied Bool,\n"
            "\t\ttstamp Timestamp,\n"
            "\n"
            "\t\tPRIMARY KEY(version_id)\n"
            "\t)"
        )

    def insert_version(self, table_name: str) -> str:
        return (
            f"INSERT INTO {table_name} (\n"
            "\t\tversion_id, \n"
            "\t\tis_applied, \n"
            "\t\ttstamp\n"
            "\t) VALUES (\n"
            "\t\tCAST($1 AS Uint64), \n"
            "\t\t$2, \n"
            "\t\tCurrentUtcTimestamp()\n"
            "\t)"
        )

    def delete_version(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE version_id = $1"

    def get_migration_by_version(self, table_name: str) -> str:
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id = $1 ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name: str) -> str:
        return (
            "\n\tSELECT version_id, is_applied, tstamp AS __discard_column_tstamp \n"
            f"\tFROM {table_name} ORDER BY __discard_column_tstamp DESC"
        )

    def get_latest_version(self, table_name: str) -> str:
        return f"SELECT MAX(version_id) FROM {table_name}"