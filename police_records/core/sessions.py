"""
Server-side session store.

The client only ever holds an opaque session id (HttpOnly cookie); the
session record itself (user id plus a snapshot of the user taken at login)
stays in process memory.  Expiry is sliding: every successful lookup pushes
``expires_at`` forward by the configured max age.  Opening a session also
sweeps out every expired one, so abandoned cookies do not pile up.
"""

from __future__ import annotations

import dataclasses
import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

from police_records.db.storage import Clock
from police_records.models.user import User, utcnow

logger = logging.getLogger(__name__)

SESSION_ID_BYTES = 32


@dataclass
class Session:
    id: str
    user_id: int
    user: User
    expires_at: datetime


class SessionStore:
    def __init__(self, max_age: timedelta, clock: Clock = utcnow) -> None:
        self._max_age = max_age
        self._clock = clock
        self._lock = threading.RLock()
        self._sessions: dict[str, Session] = {}

    @property
    def max_age(self) -> timedelta:
        return self._max_age

    def create(self, user: User) -> Session:
        session = Session(
            id=secrets.token_urlsafe(SESSION_ID_BYTES),
            user_id=user.id,
            user=dataclasses.replace(user),
            expires_at=self._clock() + self._max_age,
        )
        with self._lock:
            self._purge_expired(self._clock())
            self._sessions[session.id] = session
        logger.info("Session opened for user %d", user.id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)

    def _purge_expired(self, now: datetime) -> int:
        """Drop every session past its expiry.  Caller holds the lock."""
        dead = [sid for sid, s in self._sessions.items() if now > s.expires_at]
        for sid in dead:
            del self._sessions[sid]
        if dead:
            logger.debug("Purged %d expired sessions", len(dead))
        return len(dead)

    def get(self, session_id: str | None) -> Session | None:
        """Return the live session for *session_id* and slide its expiry."""
        if not session_id:
            return None
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            now = self._clock()
            if now > session.expires_at:
                del self._sessions[session_id]
                return None
            session.expires_at = now + self._max_age
            return session

    def refresh_user(self, session: Session, user: User) -> None:
        """Replace the cached user snapshot with a fresh copy from the store."""
        with self._lock:
            session.user = dataclasses.replace(user)

    def destroy(self, session_id: str | None) -> bool:
        if not session_id:
            return False
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Session closed for user %d", removed.user_id)
        return removed is not None

    def destroy_for_user(self, user_id: int) -> int:
        """Drop every session belonging to *user_id*; returns how many."""
        with self._lock:
            doomed = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
            for sid in doomed:
                del self._sessions[sid]
        return len(doomed)
