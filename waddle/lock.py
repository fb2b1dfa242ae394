"""Session-level locking so that only one process migrates at a time."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

DEFAULT_LOCK_ID = 5887940537704921958
"""CRC-64 (ECMA) checksum of the string "goose"."""


class LockError(Exception):
    """Raised when a lock cannot be acquired or released."""


class LockNotImplementedError(LockError):
    """The database does not support locking."""

    def __init__(self, message: str = "lock not implemented") -> None:
        super().__init__(message)


class UnlockNotImplementedError(LockError):
    """The database does not support unlocking."""

    def __init__(self, message: str = "unlock not implemented") -> None:
        super().__init__(message)


class SessionLocker(ABC):
    """Locks the database for the lifetime of one connection.

    Both methods must be called with the same connection.
    """

    @abstractmethod
    def session_lock(self, conn: Any) -> None:
        """Acquire the lock on *conn*."""

    @abstractmethod
    def session_unlock(self, conn: Any) -> None:
        """Release the lock held by *conn*."""


@dataclass(frozen=True)
class Probe:
    """How often (seconds) and how many times to retry a lock operation."""

    period_seconds: float
    failure_threshold: int


@dataclass
class SessionLockerConfig:
    """Settings applied by the session locker options."""

    lock_id: int = DEFAULT_LOCK_ID
    lock_probe: Probe = field(default_factory=lambda: Probe(5, 60))
    unlock_probe: Probe = field(default_factory=lambda: Probe(2, 30))


SessionLockerOption = Callable[[SessionLockerConfig], None]


def with_lock_id(lock_id: int) -> SessionLockerOption:
    """Use *lock_id* instead of DEFAULT_LOCK_ID."""

    def apply(cfg: SessionLockerConfig) -> None:
        cfg.lock_id = lock_id

    return apply


def _probe(period: int, failure_threshold: int) -> Probe:
    if period < 1:
        raise ValueError("period must be greater than 0, minimum is 1")
    if failure_threshold < 1:
        raise ValueError("failure threshold must be greater than 0, minimum is 1")
    return Probe(period, failure_threshold)


def with_lock_timeout(period: int, failure_threshold: int) -> SessionLockerOption:
    """Retry acquiring every *period* seconds, up to *failure_threshold* times."""

    def apply(cfg: SessionLockerConfig) -> None:
        cfg.lock_probe = _probe(period, failure_threshold)

    return apply


def with_unlock_timeout(period: int, failure_threshold: int) -> SessionLockerOption:
    """Retry releasing every *period* seconds, up to *failure_threshold* times."""

    def apply(cfg: SessionLockerConfig) -> None:
        cfg.unlock_probe = _probe(period, failure_threshold)

    return apply


class _Retryable(Exception):
    pass


def _query_bool(conn: Any, query: str, params: tuple) -> bool:
    cursor = conn.cursor()
    try:
        cursor.execute(query, params)
        row = cursor.fetchone()
    finally:
        close = getattr(cursor, "close", None)
        if close is not None:
            close()
    if row is None:
        raise LookupError("no rows in result set")
    return bool(row[0])


class PostgresSessionLocker(SessionLocker):
    """Uses PostgreSQL's exclusive session-level advisory locks."""

    def __init__(
        self,
        lock_id: int = DEFAULT_LOCK_ID,
        lock_probe: Probe = Probe(5, 60),
        unlock_probe: Probe = Probe(2, 30),
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.lock_id = lock_id
        self.lock_probe = lock_probe
        self.unlock_probe = unlock_probe
        self._sleep = sleep

    def _retry(self, probe: Probe, attempt: Callable[[], None]) -> None:
        retries = 0
        while True:
            try:
                attempt()
                return
            except _Retryable as exc:
                if retries >= probe.failure_threshold:
                    raise LockError(str(exc)) from None
                retries += 1
                self._sleep(probe.period_seconds)

    def _call(self, conn: Any, func: str, failure: str) -> Callable[[], None]:
        def attempt() -> None:
            try:
                ok = _query_bool(conn, f"SELECT {func}($1)", (self.lock_id,))
            except Exception as exc:
                raise LockError(f"failed to execute {func}: {exc}") from exc
            if not ok:
                raise _Retryable(failure)

        return attempt

    def session_lock(self, conn: Any) -> None:
        """Acquire the advisory lock, retrying while another session holds it."""
        self._retry(
            self.lock_probe,
            self._call(conn, "pg_try_advisory_lock", "failed to acquire lock"),
        )

    def session_unlock(self, conn: Any) -> None:
        """Release the advisory lock held by this session."""
        self._retry(
            self.unlock_probe,
            self._call(conn, "pg_advisory_unlock", "failed to unlock session"),
        )


def new_postgres_session_locker(*args: SessionLockerOption) -> PostgresSessionLocker:
    """Build a PostgresSessionLocker configured by the given options.

    Defaults: lock retried every 5s up to 60 times, unlock every 2s up to 30 times.
    """
    cfg = SessionLockerConfig()
    for option in args:
        option(cfg)
    return PostgresSessionLocker(
        lock_id=cfg.lock_id,
        lock_probe=cfg.lock_probe,
        unlock_probe=cfg.unlock_probe,
    )