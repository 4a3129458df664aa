"""Session lifecycle service exposing the manager, token generator and DTOs."""

from __future__ import annotations

from .dto import SessionConfig, SessionResult, SessionStatus
from .service import SessionManager
from .tokens import TokenGenerator, token_fingerprint

__all__ = [
    "SessionManager",
    "TokenGenerator",
    "token_fingerprint",
    # DTOs
    "SessionConfig",
    "SessionResult",
    "SessionStatus",
]
