# Overview: In-memory bearer-token sessions.

"""
Session Token Management

Tokens are random (secrets.token_hex), handed to the client once and kept
only as a SHA-256 hash. Sessions expire after an idle period and are
revoked on logout.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from .concurrency import LockedStore, synchronized


@dataclass
class Session:
    user_id: int
    created_at: datetime
    last_used_at: datetime


def generate_token() -> str:
    """64-character hex string (32 bytes of entropy)."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionStore(LockedStore):
    def __init__(self, idle_timeout: timedelta, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__()
        self._idle_timeout = idle_timeout
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._sessions: dict[str, Session] = {}

    def _is_idle(self, session: Session, now: datetime) -> bool:
        return now - session.last_used_at > self._idle_timeout

    @synchronized
    def prune_expired(self) -> int:
        """Drop every idle session; returns how many were removed."""
        now = self._clock()
        expired = [key for key, session in self._sessions.items() if self._is_idle(session, now)]
        for key in expired:
            del self._sessions[key]
        return len(expired)

    @synchronized
    def create(self, user_id: int) -> str:
        """Start a session; returns the plaintext token."""
        # Idle sessions are swept on every login
        self.prune_expired()
        token = generate_token()
        now = self._clock()
        self._sessions[hash_token(token)] = Session(user_id=user_id, created_at=now, last_used_at=now)
        return token

    @synchronized
    def validate(self, token: str) -> int | None:
        """Return the session's user id, or None if unknown or idle too long."""
        key = hash_token(token)
        session = self._sessions.get(key)
        if session is None:
            return None

        now = self._clock()
        if self._is_idle(session, now):
            del self._sessions[key]
            return None

        session.last_used_at = now
        return session.user_id

    @synchronized
    def revoke(self, token: str) -> bool:
        return self._sessions.pop(hash_token(token), None) is not None

    @synchronized
    def count(self) -> int:
        return len(self._sessions)
