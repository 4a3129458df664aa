"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

from sessionauth.services.sessions.dto import SessionConfig

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable.

    Raises
    ------
    ValueError
        If the variable is set but is not an integer.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {val!r}") from exc


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    SESSION_DURATION_MS: int
        Hard validity window of a session, in milliseconds.
    SESSION_GRACE_PERIOD_MS: int
        Window after expiry during which a session may be silently renewed.
    SESSION_TOKEN_LENGTH: int
        Characters per opaque token.
    SESSION_REVOKE_ON_REFRESH: bool
        Delete the superseded token after a successful refresh.
    SESSION_KEY_PREFIX: str
        Namespace for session keys in Redis.
    REDIS_URL: str | None
        Connection URL of the session cache; in-memory store when unset.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    TESTING: bool
        Enables testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Session timing
    SESSION_DURATION_MS = env_int("SESSION_DURATION_MS", 30 * 60 * 1000)
    SESSION_GRACE_PERIOD_MS = env_int("SESSION_GRACE_PERIOD_MS", 5 * 60 * 1000)
    SESSION_TOKEN_LENGTH = env_int("SESSION_TOKEN_LENGTH", 43)
    SESSION_REVOKE_ON_REFRESH = env_bool("SESSION_REVOKE_ON_REFRESH", False)

    # Cache
    SESSION_KEY_PREFIX = os.getenv("SESSION_KEY_PREFIX", "sess:")
    REDIS_URL = os.getenv("REDIS_URL") or None
    REQUIRE_REDIS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Falls back to the in-memory store when ``REDIS_URL`` is unset and logs at
    ``DEBUG`` unless told otherwise.
    """

    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode.
    - Never talks to a real cache unless ``TEST_REDIS_URL`` is set.
    - Uses short windows so expiry paths are cheap to reach.
    """

    TESTING = True
    REDIS_URL = os.getenv("TEST_REDIS_URL") or None
    SESSION_DURATION_MS = 100_000
    SESSION_GRACE_PERIOD_MS = 10_000
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    A shared cache is mandatory: several processes must see the same sessions.
    """

    REQUIRE_REDIS = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Configuration class consumed by :func:`sessionauth.factory.build_session_manager`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def session_config_from(config: type[BaseConfig] | object) -> SessionConfig:
    """Build the immutable :class:`SessionConfig` from a configuration object.

    Parameters
    ----------
    config: type[BaseConfig] | object
        Any object exposing the ``SESSION_*`` attributes.

    Raises
    ------
    ValueError
        If the configured values are out of range.
    """
    return SessionConfig.from_millis(
        session_duration=int(getattr(config, "SESSION_DURATION_MS")),
        grace_period=int(getattr(config, "SESSION_GRACE_PERIOD_MS")),
        token_length=int(getattr(config, "SESSION_TOKEN_LENGTH", 43)),
        revoke_on_refresh=bool(getattr(config, "SESSION_REVOKE_ON_REFRESH", False)),
    )
