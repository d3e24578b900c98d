"""
Password hashing (bcrypt) and reset-token generation.
"""

from __future__ import annotations

import secrets

from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from police_records.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

RESET_TOKEN_BYTES = 32


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except PasswordValueError:
        # bcrypt refuses NUL bytes; such a password can never match
        return False


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


def dummy_verify() -> None:
    """Burn the same time as a real verify when there is no user to check."""
    pwd_context.dummy_verify()


# ── Tokens ──────────────────────────────────────────────────────────
def generate_reset_token() -> str:
    """Return a 64-character hex token (32 bytes of entropy)."""
    return secrets.token_hex(RESET_TOKEN_BYTES)
