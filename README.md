# waddle

Building blocks for versioned database schema migrations. Only the Python
standard library is needed.

## Modules

- **`waddle.sqlparser`**: splits annotated `.sql` migration files into the
  statements of each direction. Annotation lines take the form
  `-- +goose <annotation>`, where the annotation is one of `Up`, `Down`,
  `StatementBegin`, `StatementEnd`, `NO TRANSACTION`, `ENVSUB ON` or
  `ENVSUB OFF`. The names are matched case-insensitively.
  `parse_sql_migration(stream, direction, debug)` returns the statements and
  whether the migration runs in a transaction. `parse_all_from_fs(root,
  filename, debug)` parses both directions into a `ParsedSQL`. Any problem
  raises `SQLParseError`; `AnnotationError` is a subclass of it.
- **`waddle.envsub`**: `interpolate(template, env)` expands `$VAR`,
  `${VAR}`, `${VAR:-default}`, `${VAR-default}`, `${VAR:?message}`,
  `${VAR?message}` and `${VAR:offset[:length]}`. It raises
  `SubstitutionError` on failure. The SQL parser uses it on lines that follow
  `ENVSUB ON`, with values taken from the process environment.
- **`waddle.resolve`**: `up_versions(fsys_versions, db_versions, target,
  allow_missing)` lists, in ascending order, the versions that still need
  applying. Where unapplied versions lie below the highest applied one, it
  raises `MissingMigrationsError`, unless `allow_missing` is true.
- **`waddle.dialectquery`**: a `Querier` for each dialect: `Postgres`,
  `Mysql`, `Sqlite3`, `Sqlserver`, `Redshift`, `Tidb`, `Clickhouse`,
  `Vertica`, `Ydb` and `Turso`. Each builds the SQL for the version table.
- **`waddle.dialect`**: the `Dialect` enum, and `new_store(dialect)`, which
  returns a `Store` that runs those queries on a DB-API connection.
  Committing is left to the caller.
- **`waddle.migrate`**:
  - `Migration` and `Migrations`, a list type with `current`, `next`,
    `previous`, `last`, `versioned` and `timestamped`.
  - `numeric_component(filename)` reads the version prefix of a `.sql` or
    `.go` file name.
  - `collect_migrations(root, dirpath, current, target, registered)` gathers
    migration files in a version range. `sort_and_connect_migrations` sorts
    them and links each to its neighbours.
  - `version_filter` tests whether a version falls in the range.
  - `ensure_db_version` and `get_db_version` read the current version. If
    the version table is missing, they create it and record version 0.
  - Failures raise subclasses of `MigrateError`: `NoMigrationFilesError`,
    `NoCurrentVersionError`, `NoNextVersionError` and
    `DuplicateVersionError`.
- **`waddle.lock`**: `PostgresSessionLocker` takes a PostgreSQL advisory
  session lock and retries while another session holds it. Build one with
  `new_postgres_session_locker(...)` and the options `with_lock_id`,
  `with_lock_timeout` and `with_unlock_timeout`. By default the lock is tried
  every 5 s up to 60 times, and the unlock every 2 s up to 30 times. Failures
  raise `LockError`.
- **`waddle.migrationstats`**: `gather_stats(FileWalker(*filenames), debug)`
  returns a `Stats` for each `.sql` or `.go` file. Each holds the version,
  the up and down statement counts and the transaction mode. Go files are
  read by finding the registration call in their `init` function.
- **`waddle.log`**: a replaceable package logger, with `set_logger`,
  `get_logger`, `nop_logger`, `StdLogger` and `NopLogger`.
- **`waddle.cfg`**: `env_or(key, default)`, and `list_vars()`, which gives
  the effective values of `GOOSE_DRIVER`, `GOOSE_DBSTRING`,
  `GOOSE_MIGRATION_DIR` and `NO_COLOR`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Resolve pending versions:

```python
from waddle.resolve import up_versions, MissingMigrationsError

up_versions([1, 2, 3, 4], [1, 2], 2**63 - 1, False)   # [3, 4]

try:
    up_versions([1, 2, 3], [1, 3], 2**63 - 1, False)
except MissingMigrationsError as exc:
    print(exc)
    # detected 1 missing (out-of-order) migration lower than database version (3): version 2
```

Get the version-table SQL for a dialect:

```python
from waddle.dialectquery import Postgres

print(Postgres().insert_version("schema_migrations"))
# INSERT INTO schema_migrations (version_id, is_applied) VALUES ($1, $2)
```

Work with a version table through a store:

```python
import sqlite3
from waddle.dialect import Dialect, new_store
from waddle.migrate import ensure_db_version

conn = sqlite3.connect(":memory:")
store = new_store(Dialect("sqlite3"))
version = ensure_db_version(conn, store, "schema_migrations")   # 0, table created
```

Split a SQL migration:

```python
from waddle.sqlparser import Direction, parse_sql_migration

text = "-- +goose Up\nCREATE TABLE t (id int);\n-- +goose Down\nDROP TABLE t;\n"
parse_sql_migration(text, Direction.UP)   # (['CREATE TABLE t (id int);'], True)
```

## What it does not do

The package offers no command-line tool. It has no migration runner that
applies or rolls back migrations against a database; that work is left to
the caller, built from the parser, store, resolver and locker above. Code
migrations can't be registered: `collect_migrations` only takes an
existing `registered` mapping of `Migration` objects. Database drivers are
not included either; any DB-API connection can be passed in.