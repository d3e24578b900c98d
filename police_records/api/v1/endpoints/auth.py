"""
Auth endpoints — login / logout, admin registration and password reset.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from police_records.api.v1.deps import (clear_session_cookie,
                                        get_current_session, get_sessions,
                                        get_storage, require_admin,
                                        set_session_cookie)
from police_records.core.config import settings
from police_records.core.exceptions import (AccountDisabled, InternalFailure,
                                            InvalidCredentials,
                                            InvalidOrExpiredToken,
                                            NotFoundError)
from police_records.core.security import (dummy_verify, generate_reset_token,
                                          get_password_hash, verify_password)
from police_records.core.sessions import Session, SessionStore
from police_records.db.storage import MemStorage
from police_records.schemas.auth import (ForgotPasswordRequest,
                                         ForgotPasswordResponse, LoginRequest,
                                         ResetPasswordRequest)
from police_records.schemas.common import MessageResponse
from police_records.schemas.user import RegisterRequest, UserEnvelope, UserRead

# Rate limiter — keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

# Same wording whether or not the username exists.
_RESET_REQUESTED = "If the username exists, a reset token has been generated"


@router.post("/login", response_model=UserEnvelope)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
) -> dict:
    """Check credentials and open a session (HttpOnly cookie)."""
    user = storage.get_user_by_username(body.username)
    if user is None:
        dummy_verify()
        logger.warning("Failed login: unknown username")
        raise InvalidCredentials()
    if not verify_password(body.password, user.hashed_password):
        logger.warning("Failed login for user %d: bad password", user.id)
        raise InvalidCredentials()
    if not user.is_active:
        raise AccountDisabled()

    storage.update_last_login(user.id)
    # Never carry a pre-login session id over (fixation)
    sessions.destroy(request.cookies.get(settings.SESSION_COOKIE_NAME))
    session = sessions.create(user)
    set_session_cookie(response, session, sessions)

    logger.info("User %d (%s) logged in", user.id, user.username)
    return {"user": UserRead.model_validate(session.user)}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_sessions),
) -> MessageResponse:
    """Destroy the current session.  Safe to call without one."""
    try:
        sessions.destroy(request.cookies.get(settings.SESSION_COOKIE_NAME))
    except Exception as exc:
        logger.exception("Session destroy failed")
        raise InternalFailure("Could not log out") from exc
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserEnvelope)
async def read_current_user(
    session: Session = Depends(get_current_session),
    storage: MemStorage = Depends(get_storage),
) -> dict:
    """Return profile of the currently authenticated user."""
    user = storage.get_user(session.user_id)
    if user is None:
        raise NotFoundError("User not found")
    return {"user": UserRead.model_validate(user)}


# ── Registration (admin-only) ──────────────────────────────────────
@router.post("/register", response_model=UserEnvelope, status_code=201)
async def register(
    body: RegisterRequest,
    storage: MemStorage = Depends(get_storage),
    admin: Session = Depends(require_admin),
) -> dict:
    """Create a new user account (admin only)."""
    storage.ensure_user_identity_available(username=body.username, email=body.email)

    data = body.model_dump(exclude={"password", "confirm_password"})
    data["hashed_password"] = get_password_hash(body.password)
    user = storage.create_user(data)

    logger.info("User %d registered %s (%s)", admin.user_id, user.username, user.role)
    return {"user": UserRead.model_validate(user)}


# ── Password reset ─────────────────────────────────────────────────
@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
)
@limiter.limit(settings.FORGOT_PASSWORD_RATE_LIMIT)
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    storage: MemStorage = Depends(get_storage),
) -> ForgotPasswordResponse:
    """Issue a one-hour reset token.

    Whether the username exists is never revealed: the message is the same
    and a token is generated either way, it is only stored (and echoed) for
    a real user.
    """
    token = generate_reset_token()
    user = storage.get_user_by_username(body.username)
    if user is None:
        return ForgotPasswordResponse(message=_RESET_REQUESTED)

    storage.create_password_reset_token(user.id, token)
    logger.info("Password reset token issued for user %d", user.id)
    if not settings.EXPOSE_RESET_TOKEN:
        return ForgotPasswordResponse(message=_RESET_REQUESTED)
    return ForgotPasswordResponse(message=_RESET_REQUESTED, token=token)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    storage: MemStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_sessions),
) -> MessageResponse:
    """Consume a reset token and set the new password."""
    record = storage.get_password_reset_token(body.token)
    if record is None:
        raise InvalidOrExpiredToken()

    try:
        storage.update_user_password(record.user_id, get_password_hash(body.password))
    except NotFoundError:
        storage.delete_password_reset_token(body.token)
        raise InvalidOrExpiredToken() from None
    storage.delete_password_reset_token(body.token)
    sessions.destroy_for_user(record.user_id)

    logger.info("Password reset for user %d", record.user_id)
    return MessageResponse(message="Password updated successfully")
