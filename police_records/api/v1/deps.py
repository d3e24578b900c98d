"""
FastAPI dependencies — store access and the two auth guards.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request, Response

from police_records.core.config import settings
from police_records.core.exceptions import Forbidden, Unauthenticated
from police_records.core.sessions import Session, SessionStore
from police_records.db.storage import MemStorage

logger = logging.getLogger(__name__)


# ── Application state ───────────────────────────────────────────────
def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def set_session_cookie(response: Response, session: Session, sessions: SessionStore) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.id,
        httponly=True,
        secure=settings.COOKIE_SECURE,  # Set to True in HTTPS production
        samesite="lax",
        max_age=int(sessions.max_age.total_seconds()),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_session(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_sessions),
) -> Session:
    """Resolve the session cookie; 401 if missing or expired.

    The lookup slides the expiry, so the cookie is re-issued with a fresh
    max-age on every authenticated request.
    """
    session = sessions.get(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if session is None:
        raise Unauthenticated()
    set_session_cookie(response, session, sessions)
    return session


async def require_admin(
    session: Session = Depends(get_current_session),
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
) -> Session:
    """Only allow active admins to proceed.

    The role is re-read from the store rather than trusted from the login
    snapshot, so a demotion or deactivation takes effect immediately.
    """
    user = storage.get_user(session.user_id)
    if user is None:
        sessions.destroy(session.id)
        raise Unauthenticated()
    sessions.refresh_user(session, user)
    if not user.is_admin or not user.is_active:
        logger.warning("User %d denied admin access", user.id)
        raise Forbidden()
    return session
