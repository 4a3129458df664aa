"""
Domain-level exceptions used within the session service layer.

These exceptions are **transport-agnostic** and never depend on HTTP or on a
concrete cache client. Session outcomes are normally reported as a tagged
:class:`~sessionauth.services.sessions.dto.SessionResult`; the classes below are
what :meth:`SessionResult.unwrap` raises for callers that prefer exceptions, and
what infrastructure adapters raise when the backend itself fails.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class SessionError(Exception):
    """
    Base class for all session-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Callers map them to user-visible responses (e.g. "please sign in again").
    """

    pass


# --------------------------------------------------------------------------- #
# Issuance errors
# --------------------------------------------------------------------------- #


class SessionCreationFailedError(SessionError):
    """
    Raised when the store did not acknowledge the write of a new session.

    Retry policy belongs to the caller.
    """

    def __init__(self, message: str = "Session could not be stored") -> None:
        super().__init__(message)


class EntropySourceUnavailableError(SessionError):
    """
    Raised when the secure random source cannot be read.

    Fatal to issuance: tokens are never produced from a weaker source.
    """

    def __init__(self, message: str = "Secure random source unavailable") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Verification errors (terminal: the principal must re-authenticate)
# --------------------------------------------------------------------------- #


class SessionNotFoundError(SessionError):
    """
    Raised when the token is unknown to the store.

    Covers explicit logout, store-side TTL expiry and tokens that never existed;
    the three cases are deliberately indistinguishable.
    """

    def __init__(self, message: str = "Session not found") -> None:
        super().__init__(message)


class SessionLoggedOutError(SessionError):
    """Raised when the credential recheck inside the grace window fails."""

    def __init__(self, message: str = "Session is no longer valid. Please sign in.") -> None:
        super().__init__(message)


class SessionExpiredBeyondGraceError(SessionError):
    """Raised when a session is past ``expires_at + grace_period``."""

    def __init__(self, message: str = "Session expired. Please sign in.") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Infrastructure errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class SessionStoreError(SessionError):
    """
    Raised by store adapters when the backend cannot serve a request.

    :param operation: Store operation that failed (``get``, ``set``, ``delete``).
    :type operation: str
    :param detail: Short explanation (never contains the raw token).
    :type detail: str
    """

    operation: str
    detail: str

    def __str__(self) -> str:
        return f"Session store {self.operation} failed: {self.detail}"
