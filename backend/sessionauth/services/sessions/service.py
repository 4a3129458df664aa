# sessionauth/services/sessions/service.py
from __future__ import annotations

import logging
from datetime import datetime

from sessionauth.services._shared.errors import (
    EntropySourceUnavailableError,
    SessionStoreError,
)
from sessionauth.services._shared.ports.clock import Clock, SystemClock
from sessionauth.services._shared.ports.credential_recheck import CredentialRecheck
from sessionauth.services._shared.ports.session_store import (
    SessionPayload,
    SessionState,
    SessionStore,
)
from sessionauth.services.sessions.dto import SessionConfig, SessionResult, SessionStatus
from sessionauth.services.sessions.tokens import TokenGenerator, token_fingerprint

log = logging.getLogger(__name__)


class SessionManager:
    """
    Session lifecycle service (create / verify / refresh / end).

    Issues opaque tokens via :class:`TokenGenerator`, keeps session state in a
    pluggable :class:`SessionStore`, and renews sessions inside the grace window
    after a :class:`CredentialRecheck`. All outcomes are returned as a
    :class:`SessionResult`; nothing is raised for session states.

    The manager holds no mutable state beyond its collaborators and immutable
    configuration, so one instance may be shared across threads.
    """

    def __init__(
        self,
        *,
        store: SessionStore,
        credential_recheck: CredentialRecheck,
        config: SessionConfig | None = None,
        clock: Clock | None = None,
        token_generator: TokenGenerator | None = None,
    ) -> None:
        """
        Initialize the manager with its dependencies.

        :param store: TTL-bound key/value store holding session payloads.
        :param credential_recheck: Revalidation used on the refresh path.
        :param config: Timing and token configuration.
        :param clock: Time source (system clock by default).
        :param token_generator: Source of opaque tokens.
        """
        self.store = store
        self.recheck = credential_recheck
        self.cfg = config or SessionConfig()
        self.clock = clock or SystemClock()
        self.tokens = token_generator or TokenGenerator()

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_session(self, user_id: int | str) -> SessionResult:
        """
        Issue a new session for an already-authenticated principal.

        :param user_id: Principal identifier from the external credential check.
        :returns: ``CREATED`` with the payload, or ``CREATION_FAILED`` /
            ``ENTROPY_UNAVAILABLE``.
        :raises ValueError: If ``user_id`` is not an ``int`` or ``str``.
        """
        if isinstance(user_id, bool) or not isinstance(user_id, int | str):
            raise ValueError("user_id must be an int or str.")
        return self._issue(user_id, self.clock.now(), SessionStatus.CREATED)

    # ------------------------------------------------------------------ #
    # Verify (+ silent refresh)
    # ------------------------------------------------------------------ #

    def verify_session(self, token: str) -> SessionResult:
        """
        Resolve a token presented by a client.

        Flow
        ----
        1. Unknown token → ``NOT_FOUND``.
        2. Before ``expires_at`` → ``VALID`` with the stored payload, no writes.
        3. Inside the grace window → recheck the principal; on success mint a new
           session (``REFRESHED``), otherwise ``LOGGED_OUT``.
        4. Past ``expires_at + grace_period`` → ``EXPIRED_BEYOND_GRACE``, even if
           the store still holds the entry.

        :raises SessionStoreError: If the store cannot be read.
        """
        if not isinstance(token, str) or not token:
            return SessionResult.failure(SessionStatus.NOT_FOUND)

        payload = self.store.get(token)
        if payload is None:
            log.debug(
                "session_not_found",
                extra={"token_fp": token_fingerprint(token), "status": "NOT_FOUND"},
            )
            return SessionResult.failure(SessionStatus.NOT_FOUND)

        # read once; every branch below is decided against the same instant
        now = self.clock.now()
        state = payload.state_at(now, self.cfg.grace_period)

        if state is SessionState.VALID:
            return SessionResult(status=SessionStatus.VALID, payload=payload)

        if state is SessionState.EXPIRED_BEYOND_GRACE:
            log.info(
                "session_expired_beyond_grace",
                extra={"token_fp": token_fingerprint(token), "status": "EXPIRED_BEYOND_GRACE"},
            )
            return SessionResult.failure(SessionStatus.EXPIRED_BEYOND_GRACE)

        return self._refresh(payload, now)

    # ------------------------------------------------------------------ #
    # End / inspect
    # ------------------------------------------------------------------ #

    def end_session(self, token: str) -> bool:
        """
        Explicit logout: remove the session from the store.

        :returns: ``True`` if a live session was removed.
        :raises SessionStoreError: If the store cannot be reached.
        """
        if not isinstance(token, str) or not token:
            return False
        removed = self.store.delete(token)
        log.info(
            "session_ended",
            extra={"token_fp": token_fingerprint(token), "status": "ENDED" if removed else "ABSENT"},
        )
        return removed

    def inspect(self, token: str) -> SessionState | None:
        """
        Classify a token without refreshing it.

        :returns: The current :class:`SessionState`, or ``None`` when unknown.
        """
        if not isinstance(token, str) or not token:
            return None
        payload = self.store.get(token)
        if payload is None:
            return None
        return payload.state_at(self.clock.now(), self.cfg.grace_period)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _refresh(self, old: SessionPayload, now: datetime) -> SessionResult:
        fp = token_fingerprint(old.token)
        try:
            eligible = bool(self.recheck.check(old.user_id))
        except Exception:
            log.warning("session_recheck_error", extra={"token_fp": fp}, exc_info=True)
            eligible = False

        if not eligible:
            log.info("session_recheck_denied", extra={"token_fp": fp, "status": "LOGGED_OUT"})
            return SessionResult.failure(SessionStatus.LOGGED_OUT)

        result = self._issue(old.user_id, now, SessionStatus.REFRESHED)
        if not result.ok:
            return result

        if self.cfg.revoke_on_refresh:
            try:
                self.store.delete(old.token)
            except SessionStoreError:
                # the old entry still dies with its own TTL
                log.warning("session_revoke_on_refresh_failed", extra={"token_fp": fp}, exc_info=True)

        log.info(
            "session_refreshed",
            extra={"token_fp": fp, "status": "REFRESHED"},
        )
        return result

    def _issue(self, user_id: int | str, now: datetime, status: SessionStatus) -> SessionResult:
        try:
            token = self.tokens.generate(self.cfg.token_length)
        except EntropySourceUnavailableError:
            log.error("session_entropy_unavailable", exc_info=True)
            return SessionResult.failure(SessionStatus.ENTROPY_UNAVAILABLE)

        payload = SessionPayload(
            token=token,
            user_id=user_id,
            issued_at=now,
            expires_at=now + self.cfg.session_duration,
        )

        try:
            stored = self.store.set(token, payload, self.cfg.store_ttl)
        except SessionStoreError:
            log.warning("session_store_write_error", exc_info=True)
            stored = False

        if not stored:
            log.warning(
                "session_creation_failed",
                extra={"token_fp": token_fingerprint(token), "status": "CREATION_FAILED"},
            )
            return SessionResult.failure(SessionStatus.CREATION_FAILED)

        log.info(
            "session_created",
            extra={"token_fp": token_fingerprint(token), "status": status.name},
        )
        return SessionResult(status=status, payload=payload)
