# comments in English; reST docstrings
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from sessionauth.services._shared.errors import SessionStoreError
from sessionauth.services._shared.ports import SessionPayload, SessionStore

DEFAULT_KEY_PREFIX = "sess:"


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Every operation is a single Redis command, so per-key atomicity comes from
    Redis itself; TTL is enforced server-side in milliseconds.

    :param r: A Redis client (already connected).
    :param prefix: Namespace prepended to every token key.
    """

    r: redis.Redis
    prefix: str = DEFAULT_KEY_PREFIX

    # -------------------- helpers --------------------

    def _k(self, token: str) -> str:
        return f"{self.prefix}{token}"

    @staticmethod
    def _to_ms(ttl: timedelta) -> int:
        return ttl // timedelta(milliseconds=1)

    # -------------------- API ------------------------

    def get(self, key: str) -> SessionPayload | None:
        try:
            raw = self.r.get(self._k(key))
        except RedisError as exc:
            raise SessionStoreError("get", type(exc).__name__) from exc
        if raw is None:
            return None
        if isinstance(raw, bytes | bytearray):
            raw = raw.decode()
        try:
            return SessionPayload.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as exc:
            raise SessionStoreError("get", "corrupt session payload") from exc

    def set(self, key: str, payload: SessionPayload, ttl: timedelta) -> bool:
        """
        Create the entry with ``SET key value PX ttl NX``.

        ``NX`` guarantees a live token is never overwritten; Redis answers
        ``None`` in that case and the write is reported as not acknowledged.
        """
        ttl_ms = self._to_ms(ttl)
        if ttl_ms <= 0:
            return False
        try:
            raw = json.dumps(payload.to_dict())
        except (TypeError, ValueError) as exc:
            raise SessionStoreError("set", "payload is not serialisable") from exc
        try:
            ok = self.r.set(self._k(key), raw, px=ttl_ms, nx=True)
        except RedisError as exc:
            raise SessionStoreError("set", type(exc).__name__) from exc
        return bool(ok)

    def delete(self, key: str) -> bool:
        try:
            removed = cast(int, self.r.delete(self._k(key)))
        except RedisError as exc:
            raise SessionStoreError("delete", type(exc).__name__) from exc
        return removed == 1

