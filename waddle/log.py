"""Pluggable logger used for package output."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, TextIO


class Logger(ABC):
    """Interface for package output."""

    @abstractmethod
    def fatalf(self, format: str, *args: Any) -> None:
        """Log a formatted message and stop the program."""

    @abstractmethod
    def printf(self, format: str, *args: Any) -> None:
        """Log a formatted message."""


def _render(format: str, args: tuple) -> str:
    return format % args if args else format


class StdLogger(Logger):
    """Writes timestamped lines to a stream, standard error by default."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def _write(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        if not message.endswith("\n"):
            message += "\n"
        stream.write(f"{time.strftime('%Y/%m/%d %H:%M:%S')} {message}")
        stream.flush()

    def printf(self, format: str, *args: Any) -> None:
        self._write(_render(format, args))

    def fatalf(self, format: str, *args: Any) -> None:
        self._write(_render(format, args))
        raise SystemExit(1)


class NopLogger(Logger):
    """Discards everything it is given."""

    def printf(self, format: str, *args: Any) -> None:
        return None

    def fatalf(self, format: str, *args: Any) -> None:
        return None


_logger: Logger = StdLogger()


def set_logger(logger: Logger) -> None:
    """Use *logger* for package output."""
    global _logger
    _logger = logger


def get_logger() -> Logger:
    """Return the logger in use."""
    return _logger


def nop_logger() -> Logger:
    """Return a logger that discards all output."""
    return NopLogger()