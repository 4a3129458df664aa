"""
sessionauth.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
session manager depends on.

These ports decouple the service layer from the concrete cache, identity
backend and time source.

Modules
-------
- :mod:`clock`:
    Defines :class:`~.Clock` — abstraction for the current time, with
    :class:`~.SystemClock` and the test double :class:`~.FrozenClock`.

- :mod:`session_store`:
    Defines :class:`~.SessionStore`, :class:`~.SessionPayload` and
    :class:`~.SessionState` — abstractions for TTL-bound session persistence.

- :mod:`credential_recheck`:
    Defines :class:`~.CredentialRecheck` — revalidation of a principal during
    grace-window renewal.

Design Notes
------------
All these ports follow the *Dependency Inversion Principle (DIP)* to keep
the service layer independent from implementation details.
Concrete adapters (e.g., Redis) implement these interfaces under
``sessionauth.infra``.
"""

from __future__ import annotations

from .clock import Clock, FrozenClock, SystemClock
from .credential_recheck import CredentialRecheck, InMemoryCredentialRecheck
from .session_store import (
    InMemorySessionStore,
    SessionPayload,
    SessionState,
    SessionStore,
)

__all__ = [
    "Clock",
    "SystemClock",
    "FrozenClock",
    "CredentialRecheck",
    "InMemoryCredentialRecheck",
    "SessionStore",
    "SessionPayload",
    "SessionState",
    "InMemorySessionStore",
]
