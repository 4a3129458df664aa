# sessionauth/services/sessions/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, auto

from sessionauth.services._shared.errors import (
    EntropySourceUnavailableError,
    SessionCreationFailedError,
    SessionError,
    SessionExpiredBeyondGraceError,
    SessionLoggedOutError,
    SessionNotFoundError,
)
from sessionauth.services._shared.ports.session_store import SessionPayload
from sessionauth.services.sessions.tokens import TokenGenerator

MIN_TOKEN_BITS = 128

# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """
    Session timing and token configuration.

    :param session_duration: Hard validity window from issuance.
    :type session_duration: timedelta
    :param grace_period: Window after expiry during which silent refresh is allowed.
    :type grace_period: timedelta
    :param token_length: Characters per generated token.
    :type token_length: int
    :param revoke_on_refresh: Delete the superseded token once a refresh succeeds.
    :type revoke_on_refresh: bool
    """

    session_duration: timedelta = timedelta(minutes=30)
    grace_period: timedelta = timedelta(minutes=5)
    token_length: int = 43
    revoke_on_refresh: bool = False

    def __post_init__(self) -> None:
        if self.session_duration <= timedelta(0):
            raise ValueError("session_duration must be positive.")
        if self.grace_period < timedelta(0):
            raise ValueError("grace_period must not be negative.")
        if TokenGenerator.entropy_bits(self.token_length) < MIN_TOKEN_BITS:
            raise ValueError(f"token_length is below {MIN_TOKEN_BITS} bits of entropy.")

    @classmethod
    def from_millis(
        cls,
        *,
        session_duration: int,
        grace_period: int,
        token_length: int = 43,
        revoke_on_refresh: bool = False,
    ) -> SessionConfig:
        return cls(
            session_duration=timedelta(milliseconds=session_duration),
            grace_period=timedelta(milliseconds=grace_period),
            token_length=token_length,
            revoke_on_refresh=revoke_on_refresh,
        )

    @property
    def store_ttl(self) -> timedelta:
        """TTL of the backing entry: long enough to support the grace-period check."""
        return self.session_duration + self.grace_period


# ------------------------------ Result DTO -------------------------------- #


class SessionStatus(Enum):
    """Outcome of a create or verify call."""

    CREATED = auto()
    VALID = auto()
    REFRESHED = auto()
    NOT_FOUND = auto()
    LOGGED_OUT = auto()
    EXPIRED_BEYOND_GRACE = auto()
    CREATION_FAILED = auto()
    ENTROPY_UNAVAILABLE = auto()


_SUCCESS = frozenset({SessionStatus.CREATED, SessionStatus.VALID, SessionStatus.REFRESHED})

_ERRORS: dict[SessionStatus, type[SessionError]] = {
    SessionStatus.NOT_FOUND: SessionNotFoundError,
    SessionStatus.LOGGED_OUT: SessionLoggedOutError,
    SessionStatus.EXPIRED_BEYOND_GRACE: SessionExpiredBeyondGraceError,
    SessionStatus.CREATION_FAILED: SessionCreationFailedError,
    SessionStatus.ENTROPY_UNAVAILABLE: EntropySourceUnavailableError,
}


@dataclass(frozen=True, slots=True)
class SessionResult:
    """
    Tagged outcome returned by :class:`~sessionauth.services.sessions.service.SessionManager`.

    :param status: What happened.
    :type status: SessionStatus
    :param payload: The session to use from now on (only on success).
    :type payload: SessionPayload | None
    """

    status: SessionStatus
    payload: SessionPayload | None = None

    @property
    def ok(self) -> bool:
        return self.status in _SUCCESS

    def unwrap(self) -> SessionPayload:
        """
        Return the payload or raise the exception matching ``status``.

        :raises SessionError: Subclass mapped from the failing status.
        """
        if self.ok and self.payload is not None:
            return self.payload
        raise _ERRORS[self.status]()

    @classmethod
    def failure(cls, status: SessionStatus) -> SessionResult:
        if status in _SUCCESS:
            raise ValueError(f"{status.name} is not a failure status.")
        return cls(status=status)
