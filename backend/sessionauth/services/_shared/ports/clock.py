from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port supplying the current wall-clock time as an aware UTC datetime."""

    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Clock backed by the host's system time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock(Clock):
    """
    Deterministic clock used in unit tests.

    Time only moves when :meth:`advance` or :meth:`set` is called.

    :param start: Initial instant. Naive datetimes are labelled as UTC.
    """

    def __init__(self, start: datetime | None = None) -> None:
        start = start or datetime(2024, 1, 1, tzinfo=UTC)
        self._now = start if start.tzinfo else start.replace(tzinfo=UTC)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, delta: timedelta | None = None, *, milliseconds: int = 0) -> datetime:
        """Move the clock forward and return the new instant."""
        step = (delta or timedelta()) + timedelta(milliseconds=milliseconds)
        with self._lock:
            self._now = self._now + step
            return self._now

    def set(self, instant: datetime) -> None:
        with self._lock:
            self._now = instant if instant.tzinfo else instant.replace(tzinfo=UTC)
