from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Protocol


class CredentialRecheck(Protocol):
    """
    Port confirming that a principal may still have its session renewed.

    Only consulted inside the grace window. Implementations may look up an
    account table, ask an identity provider, etc. Raising is treated the same
    as returning ``False``.
    """

    def check(self, user_id: int | str) -> bool: ...


class InMemoryCredentialRecheck(CredentialRecheck):
    """Recheck double that denies renewal to explicitly revoked principals."""

    def __init__(self, revoked: Iterable[int | str] = ()) -> None:
        self._revoked: set[int | str] = set(revoked)
        self._lock = threading.Lock()
        self.calls: list[int | str] = []

    def check(self, user_id: int | str) -> bool:
        with self._lock:
            self.calls.append(user_id)
            return user_id not in self._revoked

    def revoke(self, user_id: int | str) -> None:
        with self._lock:
            self._revoked.add(user_id)

    def restore(self, user_id: int | str) -> None:
        with self._lock:
            self._revoked.discard(user_id)
