"""
User & officer administration (admin only).

- ``/users``   — list and delete accounts.
- ``/officers`` — full CRUD used by the officer management screen; these
  endpoints answer with bare user objects rather than an envelope.

Nobody can delete their own account, admin or not.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends

from police_records.api.v1.deps import get_sessions, get_storage, require_admin
from police_records.core.config import settings
from police_records.core.exceptions import NotFoundError, ValidationError
from police_records.core.security import get_password_hash
from police_records.core.sessions import Session, SessionStore
from police_records.db.storage import MemStorage
from police_records.models.user import User
from police_records.schemas.common import MessageResponse
from police_records.schemas.user import (OfficerCreate, OfficerUpdate,
                                         UserListEnvelope, UserRead)

router = APIRouter(tags=["users"])
logger = logging.getLogger(__name__)


def _get_user_or_404(storage: MemStorage, user_id: int) -> User:
    user = storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _delete_account(
    user_id: int, admin: Session, storage: MemStorage, sessions: SessionStore
) -> None:
    if user_id == admin.user_id:
        raise ValidationError("Cannot delete your own account")
    if not storage.delete_user(user_id):
        raise NotFoundError("User not found")
    sessions.destroy_for_user(user_id)
    logger.info("User %d deleted user %d", admin.user_id, user_id)


# ── Users ───────────────────────────────────────────────────────────
@router.get("/users", response_model=UserListEnvelope)
async def list_users(
    storage: MemStorage = Depends(get_storage),
    _admin: Session = Depends(require_admin),
) -> dict:
    return {"users": [UserRead.model_validate(u) for u in storage.get_all_users()]}


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    admin: Session = Depends(require_admin),
) -> MessageResponse:
    _delete_account(user_id, admin, storage, sessions)
    return MessageResponse(message="User deleted successfully")


# ── Officers ────────────────────────────────────────────────────────
@router.get("/officers", response_model=list[UserRead])
async def list_officers(
    storage: MemStorage = Depends(get_storage),
    _admin: Session = Depends(require_admin),
) -> list[UserRead]:
    return [UserRead.model_validate(u) for u in storage.get_all_users()]


@router.post("/officers", response_model=UserRead, status_code=201)
async def create_officer(
    body: OfficerCreate,
    storage: MemStorage = Depends(get_storage),
    admin: Session = Depends(require_admin),
) -> UserRead:
    """Create an officer account.

    Without an explicit username the badge number is used, falling back to
    ``officer_<epoch-ms>``; without a password the configured default is set.
    """
    username = body.username or body.badge_number or f"officer_{int(time.time() * 1000)}"
    storage.ensure_user_identity_available(username=username, email=body.email)

    data = body.model_dump(exclude={"username", "password"})
    data["username"] = username
    data["hashed_password"] = get_password_hash(
        body.password or settings.DEFAULT_OFFICER_PASSWORD
    )
    officer = storage.create_user(data)

    logger.info("User %d created officer %d (%s)", admin.user_id, officer.id, username)
    return UserRead.model_validate(officer)


@router.get("/officers/{officer_id}", response_model=UserRead)
async def get_officer(
    officer_id: int,
    storage: MemStorage = Depends(get_storage),
    _admin: Session = Depends(require_admin),
) -> UserRead:
    return UserRead.model_validate(_get_user_or_404(storage, officer_id))


@router.put("/officers/{officer_id}", response_model=UserRead)
async def update_officer(
    officer_id: int,
    body: OfficerUpdate,
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    admin: Session = Depends(require_admin),
) -> UserRead:
    _get_user_or_404(storage, officer_id)
    changes = body.model_dump(exclude_unset=True)
    storage.ensure_user_identity_available(
        username=changes.get("username"),
        email=changes.get("email"),
        exclude_id=officer_id,
    )

    password = changes.pop("password", None)
    if password is not None:
        changes["hashed_password"] = get_password_hash(password)

    officer = storage.update_user(officer_id, changes)
    if officer_id != admin.user_id and (not officer.is_active or password is not None):
        sessions.destroy_for_user(officer_id)

    logger.info("User %d updated officer %d fields %s", admin.user_id, officer_id, sorted(changes))
    return UserRead.model_validate(officer)


@router.delete("/officers/{officer_id}", response_model=MessageResponse)
async def delete_officer(
    officer_id: int,
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
    admin: Session = Depends(require_admin),
) -> MessageResponse:
    _delete_account(officer_id, admin, storage, sessions)
    return MessageResponse(message="Officer deleted successfully")
