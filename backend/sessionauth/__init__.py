"""Expose the session manager factory at package level.

Provide convenient access to :func:`sessionauth.factory.build_session_manager`
so callers can ``from sessionauth import build_session_manager`` without
traversing the package structure.
"""

from __future__ import annotations

from .factory import build_session_manager
from .services.sessions import SessionConfig, SessionManager, SessionResult, SessionStatus

__all__ = [
    "build_session_manager",
    "SessionConfig",
    "SessionManager",
    "SessionResult",
    "SessionStatus",
]
