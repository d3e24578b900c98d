"""
Self-service profile endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from police_records.api.v1.deps import get_current_session, get_sessions, get_storage
from police_records.core.sessions import Session, SessionStore
from police_records.db.storage import MemStorage
from police_records.schemas.user import ProfileUpdate, UserEnvelope, UserRead

router = APIRouter(tags=["profile"])
logger = logging.getLogger(__name__)


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    body: ProfileUpdate,
    session: Session = Depends(get_current_session),
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
) -> dict:
    """Update the caller's own profile.  Role and status are not editable here."""
    changes = body.model_dump(exclude_unset=True)
    user = storage.update_user(session.user_id, changes)
    sessions.refresh_user(session, user)
    logger.info("User %d updated profile fields %s", user.id, sorted(changes))
    return {"user": UserRead.model_validate(user)}
