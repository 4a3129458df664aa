"""Pytest fixtures wiring the session manager to in-memory doubles.

Time is driven by a :class:`FrozenClock` shared by the manager and the store,
so every boundary case is reproducible to the millisecond.
"""

from __future__ import annotations

from datetime import UTC, datetime

import fakeredis
import pytest

from sessionauth.services._shared.ports import (
    FrozenClock,
    InMemoryCredentialRecheck,
    InMemorySessionStore,
)
from sessionauth.services.sessions import SessionConfig, SessionManager

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture()
def t0() -> datetime:
    """Reference instant at which sessions are created."""
    return T0


@pytest.fixture()
def clock(t0) -> FrozenClock:
    """Provide a clock frozen at :data:`T0`."""
    return FrozenClock(t0)


@pytest.fixture()
def store(clock) -> InMemorySessionStore:
    """Provide an in-memory store sharing the test clock."""
    return InMemorySessionStore(clock=clock)


@pytest.fixture()
def recheck() -> InMemoryCredentialRecheck:
    """Provide a recheck double that accepts everyone until told otherwise."""
    return InMemoryCredentialRecheck()


@pytest.fixture()
def session_cfg() -> SessionConfig:
    """100 s sessions with a 10 s grace window."""
    return SessionConfig.from_millis(session_duration=100_000, grace_period=10_000)


@pytest.fixture()
def manager(store, recheck, session_cfg, clock) -> SessionManager:
    """Build a SessionManager wired to in-memory doubles."""
    return SessionManager(
        store=store,
        credential_recheck=recheck,
        config=session_cfg,
        clock=clock,
    )


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    # ensure a clean starting point
    r.flushall()
    return r
