"""Shared infrastructure clients and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

# Global singleton (import-safe)
redis_client: redis.Redis | None = None


def init_redis(redis_url: str | None) -> redis.Redis | None:
    """Connect the shared Redis client.

    Parameters
    ----------
    redis_url: str | None
        Connection URL. ``None`` or empty resets the client, leaving callers on
        the in-memory store.

    Raises
    ------
    RuntimeError
        If the server does not answer ``PING``.
    """
    global redis_client
    if not redis_url:
        redis_client = None
        return None

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    redis_client = client
    return client


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_redis() first.")
    return redis_client
