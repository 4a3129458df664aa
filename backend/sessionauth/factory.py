"""Factory wiring configuration, logging and the session store into a manager."""

from __future__ import annotations

import logging

from sessionauth.core.config import BaseConfig, get_config, session_config_from
from sessionauth.core.logger import configure_logging
from sessionauth.services._shared.ports import (
    Clock,
    CredentialRecheck,
    InMemorySessionStore,
    SessionStore,
)
from sessionauth.services.sessions import SessionManager

log = logging.getLogger(__name__)


def build_session_manager(
    config: type[BaseConfig] | object | None = None,
    *,
    credential_recheck: CredentialRecheck,
    store: SessionStore | None = None,
    clock: Clock | None = None,
    setup_logging: bool = True,
) -> SessionManager:
    """Build a :class:`SessionManager` from a configuration object.

    The store is chosen in this order: the explicit ``store`` argument, a
    :class:`RedisSessionStore` when ``REDIS_URL`` is configured, otherwise an
    :class:`InMemorySessionStore` (single process only).

    :raises RuntimeError: If the configuration requires Redis and none is set,
        or if Redis cannot be reached.
    :raises ValueError: If the session settings are out of range.
    """

    cfg = get_config() if config is None else config

    if setup_logging:
        configure_logging(getattr(cfg, "LOG_LEVEL", "INFO"))

    session_cfg = session_config_from(cfg)

    if store is None:
        store = _store_from_config(cfg, clock)

    log.info("session_manager_ready store=%s", type(store).__name__)
    return SessionManager(
        store=store,
        credential_recheck=credential_recheck,
        config=session_cfg,
        clock=clock,
    )


def _store_from_config(cfg: type[BaseConfig] | object, clock: Clock | None) -> SessionStore:
    redis_url = getattr(cfg, "REDIS_URL", None)
    if not redis_url:
        if getattr(cfg, "REQUIRE_REDIS", False):
            raise RuntimeError("REDIS_URL must be set for this environment.")
        return InMemorySessionStore(clock=clock)

    from sessionauth.core import extensions
    from sessionauth.infra.redis.redis_session_store import RedisSessionStore

    extensions.init_redis(redis_url)
    client = extensions.get_redis()
    return RedisSessionStore(r=client, prefix=getattr(cfg, "SESSION_KEY_PREFIX", "sess:"))
