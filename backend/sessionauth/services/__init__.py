"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`sessionauth.services` without knowing internal structure.

Re-exports
----------
- Errors (from ``sessionauth.services._shared.errors``)
    * :class:`SessionError` and its subclasses

- Ports (from ``sessionauth.services._shared.ports``)
    * :class:`SessionStore`, :class:`SessionPayload`, :class:`SessionState`
    * :class:`CredentialRecheck`, :class:`Clock`

- Session service (from ``sessionauth.services.sessions``)
    * :class:`SessionManager`, :class:`TokenGenerator`
    * DTOs: :class:`SessionConfig`, :class:`SessionResult`, :class:`SessionStatus`
"""

from __future__ import annotations

from ._shared.errors import (
    EntropySourceUnavailableError,
    SessionCreationFailedError,
    SessionError,
    SessionExpiredBeyondGraceError,
    SessionLoggedOutError,
    SessionNotFoundError,
    SessionStoreError,
)
from ._shared.ports import (
    Clock,
    CredentialRecheck,
    SessionPayload,
    SessionState,
    SessionStore,
)
from .sessions import (
    SessionConfig,
    SessionManager,
    SessionResult,
    SessionStatus,
    TokenGenerator,
)

__all__ = [
    # Errors
    "SessionError",
    "SessionCreationFailedError",
    "SessionNotFoundError",
    "SessionLoggedOutError",
    "SessionExpiredBeyondGraceError",
    "EntropySourceUnavailableError",
    "SessionStoreError",
    # Ports
    "Clock",
    "CredentialRecheck",
    "SessionPayload",
    "SessionState",
    "SessionStore",
    # Sessions
    "SessionManager",
    "TokenGenerator",
    "SessionConfig",
    "SessionResult",
    "SessionStatus",
]
