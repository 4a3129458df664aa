"""Unit tests for SessionPayload and the in-memory SessionStore double."""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

import pytest

from sessionauth.services._shared.ports import (
    FrozenClock,
    InMemorySessionStore,
    SessionPayload,
    SessionState,
)

GRACE = timedelta(seconds=10)


def _payload(token: str = "tok-1", *, user_id: int | str = 42, t0: datetime | None = None):
    t0 = t0 or datetime(2024, 1, 1, tzinfo=UTC)
    return SessionPayload(
        token=token,
        user_id=user_id,
        issued_at=t0,
        expires_at=t0 + timedelta(seconds=100),
    )


# ----------------------------- SessionPayload ----------------------------- #
def test_state_intervals_are_disjoint_and_ordered():
    p = _payload()

    assert p.state_at(p.issued_at, GRACE) is SessionState.VALID
    assert p.state_at(p.expires_at - timedelta(microseconds=1), GRACE) is SessionState.VALID
    assert p.state_at(p.expires_at, GRACE) is SessionState.REFRESHABLE
    assert p.state_at(p.expires_at + GRACE - timedelta(microseconds=1), GRACE) is (
        SessionState.REFRESHABLE
    )
    assert p.state_at(p.expires_at + GRACE, GRACE) is SessionState.EXPIRED_BEYOND_GRACE


def test_zero_grace_has_no_refresh_window():
    p = _payload()

    assert p.state_at(p.expires_at, timedelta(0)) is SessionState.EXPIRED_BEYOND_GRACE


def test_refresh_deadline():
    p = _payload()

    assert p.refresh_deadline(GRACE) == p.expires_at + GRACE


@pytest.mark.parametrize("user_id", [42, "user-42"])
def test_dict_form_is_lossless(user_id):
    p = SessionPayload(
        token="tok",
        user_id=user_id,
        issued_at=datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=UTC),
        expires_at=datetime(2024, 1, 1, 12, 30, 0, 123456, tzinfo=UTC),
    )

    assert SessionPayload.from_dict(p.to_dict()) == p


# -------------------------- InMemorySessionStore -------------------------- #
@pytest.fixture()
def mem_clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, tzinfo=UTC))


@pytest.fixture()
def mem_store(mem_clock) -> InMemorySessionStore:
    return InMemorySessionStore(clock=mem_clock)


def test_set_then_get(mem_store):
    p = _payload()

    assert mem_store.set(p.token, p, timedelta(seconds=5)) is True
    assert mem_store.get(p.token) == p
    assert mem_store.get("other") is None


def test_entry_expires_with_ttl(mem_store, mem_clock):
    p = _payload()
    mem_store.set(p.token, p, timedelta(seconds=5))

    mem_clock.advance(timedelta(seconds=4, milliseconds=999))
    assert mem_store.get(p.token) == p
    mem_clock.advance(milliseconds=1)
    assert mem_store.get(p.token) is None
    assert len(mem_store) == 0


def test_set_never_overwrites_live_key(mem_store):
    first = _payload(user_id=1)
    second = _payload(user_id=2)

    assert mem_store.set("tok-1", first, timedelta(seconds=5)) is True
    assert mem_store.set("tok-1", second, timedelta(seconds=5)) is False
    assert mem_store.get("tok-1") == first


def test_set_rejects_non_positive_ttl(mem_store):
    p = _payload()

    assert mem_store.set(p.token, p, timedelta(0)) is False
    assert mem_store.get(p.token) is None


def test_delete(mem_store, mem_clock):
    p = _payload()
    mem_store.set(p.token, p, timedelta(seconds=5))

    assert mem_store.delete(p.token) is True
    assert mem_store.delete(p.token) is False
    assert mem_store.get(p.token) is None


def test_delete_of_expired_entry_reports_absent(mem_store, mem_clock):
    p = _payload()
    mem_store.set(p.token, p, timedelta(seconds=5))
    mem_clock.advance(timedelta(seconds=6))

    assert mem_store.delete(p.token) is False


def test_concurrent_set_on_same_key_has_single_winner(mem_store):
    results: list[bool] = []
    barrier = threading.Barrier(8)

    def _writer(uid: int) -> None:
        barrier.wait()
        results.append(mem_store.set("shared", _payload("shared", user_id=uid), timedelta(seconds=5)))

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1


def test_expired_entries_are_purged_without_being_read(mem_store, mem_clock):
    for i in range(1000):
        mem_store.set(f"tok-{i}", _payload(f"tok-{i}"), timedelta(minutes=30))
    mem_clock.advance(timedelta(days=1))

    mem_store.set("fresh", _payload("fresh"), timedelta(seconds=5))

    assert list(mem_store._entries) == ["fresh"]


def test_recreated_key_outlives_its_earlier_expiry(mem_store, mem_clock):
    mem_store.set("tok-1", _payload(user_id=1), timedelta(seconds=5))
    mem_store.delete("tok-1")
    mem_store.set("tok-1", _payload(user_id=2), timedelta(seconds=60))

    mem_clock.advance(timedelta(seconds=10))

    view = mem_store.get("tok-1")
    assert view is not None
    assert view.user_id == 2
