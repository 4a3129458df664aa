from __future__ import annotations

import heapq
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum, auto
from typing import Any, Protocol

from .clock import Clock, SystemClock


class SessionState(Enum):
    """Classification of a stored session against a point in time."""

    VALID = auto()
    REFRESHABLE = auto()
    EXPIRED_BEYOND_GRACE = auto()


@dataclass(frozen=True, slots=True)
class SessionPayload:
    """
    Unit of session state, addressed in the store by its token.

    :ivar token: Opaque random identifier; encodes nothing about the principal.
    :ivar user_id: Identifier of the authenticated principal.
    :ivar issued_at: Creation instant (aware UTC).
    :ivar expires_at: Hard validity boundary, ``issued_at + session_duration``.
    """

    token: str
    user_id: int | str
    issued_at: datetime
    expires_at: datetime

    def refresh_deadline(self, grace_period: timedelta) -> datetime:
        """Return the instant after which the session cannot be renewed."""
        return self.expires_at + grace_period

    def state_at(self, now: datetime, grace_period: timedelta) -> SessionState:
        """
        Place ``now`` in one of three disjoint, ordered intervals.

        ``[.., expires_at)`` is valid, ``[expires_at, expires_at + grace)`` is
        refreshable and everything after is expired.
        """
        if now < self.expires_at:
            return SessionState.VALID
        if now < self.refresh_deadline(grace_period):
            return SessionState.REFRESHABLE
        return SessionState.EXPIRED_BEYOND_GRACE

    # ----------------------- serialization -----------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "token": self.token,
            "user_id": self.user_id,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionPayload:
        return cls(
            token=str(data["token"]),
            user_id=data["user_id"],
            issued_at=datetime.fromisoformat(data["issued_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )


class SessionStore(Protocol):
    """
    Key/value store with per-key TTL holding :class:`SessionPayload` entries.

    Each call is independent; no transaction spans several calls.
    Backend failures MUST surface as
    :class:`~sessionauth.services._shared.errors.SessionStoreError`.
    """

    def get(self, key: str) -> SessionPayload | None:
        """Atomically read a payload. Entries whose TTL has elapsed are never returned."""

    def set(self, key: str, payload: SessionPayload, ttl: timedelta) -> bool:
        """
        Atomically create ``key`` with an expiry relative to the store's own clock.

        :returns: ``True`` when acknowledged. A live entry under ``key`` is never
            overwritten; the write is refused with ``False``.
        """

    def delete(self, key: str) -> bool:
        """Remove ``key``. :returns: True if a live entry existed."""


@dataclass(frozen=True, slots=True)
class _Entry:
    payload: SessionPayload
    evict_at: datetime


class InMemorySessionStore(SessionStore):
    """
    In-process session store with TTL semantics.

    .. note::
       Uses a threading lock to keep each call atomic. Expiry is evaluated
       against its own clock, which may differ from the manager's. A min-heap
       of eviction instants lets every call drop lapsed entries, so tokens that
       are never presented again do not accumulate.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._entries: dict[str, _Entry] = {}
        self._expiry: list[tuple[datetime, str]] = []
        self._lock = threading.Lock()

    # ------------------------- helpers -------------------------

    def _purge(self, now: datetime) -> None:
        while self._expiry and self._expiry[0][0] <= now:
            evict_at, key = heapq.heappop(self._expiry)
            entry = self._entries.get(key)
            # heap items of deleted keys are stale; skip them
            if entry is not None and entry.evict_at == evict_at:
                del self._entries[key]

    def _live(self, key: str) -> _Entry | None:
        self._purge(self._clock.now())
        return self._entries.get(key)

    # -------------------------- API ----------------------------

    def get(self, key: str) -> SessionPayload | None:
        with self._lock:
            entry = self._live(key)
            return entry.payload if entry else None

    def set(self, key: str, payload: SessionPayload, ttl: timedelta) -> bool:
        if ttl <= timedelta(0):
            return False
        with self._lock:
            if self._live(key) is not None:
                return False
            evict_at = self._clock.now() + ttl
            self._entries[key] = _Entry(payload=payload, evict_at=evict_at)
            heapq.heappush(self._expiry, (evict_at, key))
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            if self._live(key) is None:
                return False
            del self._entries[key]
            return True

    def __len__(self) -> int:
        with self._lock:
            self._purge(self._clock.now())
            return len(self._entries)
