"""Pydantic schemas for users, registration, profile and officer CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from police_records.models.user import ROLE_USER, VALID_ROLES
from police_records.schemas.common import CamelModel, normalise_email, require_text

MIN_PASSWORD_LENGTH = 6


def check_password(v: str | None) -> str | None:
    """Reject passwords bcrypt cannot hash (it refuses NUL bytes)."""
    if v is not None and "\x00" in v:
        raise ValueError("Password must not contain NUL characters")
    return v


def _validate_role(v: str | None) -> str | None:
    if v is not None and v not in VALID_ROLES:
        raise ValueError(f"Role must be one of: {sorted(VALID_ROLES)}")
    return v


class UserRead(CamelModel):
    """Public view of a user.  The password hash is never part of it."""

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None
    profile_image: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login_at: datetime | None = None


class UserEnvelope(CamelModel):
    user: UserRead


class UserListEnvelope(CamelModel):
    users: list[UserRead]


# ── Registration (admin only) ──────────────────────────────────────
class RegisterRequest(CamelModel):
    username: str
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str = Field(min_length=1)
    first_name: str
    last_name: str
    role: str = ROLE_USER
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)  # type: ignore[return-value]

    @field_validator("role")
    @classmethod
    def _role(cls, v: str) -> str:
        return _validate_role(v)  # type: ignore[return-value]

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


# ── Profile (self-service) ─────────────────────────────────────────
class ProfileUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None
    profile_image: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _not_blank(cls, v: str | None, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str:
        return normalise_email(v)


# ── Officers (admin) ───────────────────────────────────────────────
class OfficerCreate(CamelModel):
    first_name: str
    last_name: str
    email: str
    username: str | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    role: str = ROLE_USER
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("username", "badge_number")
    @classmethod
    def _blank_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str | None) -> str | None:
        return check_password(v)

    @field_validator("role")
    @classmethod
    def _role(cls, v: str) -> str:
        return _validate_role(v)  # type: ignore[return-value]


class OfficerUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    role: str | None = None
    is_active: bool | None = None
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None
    profile_image: str | None = None

    @field_validator("first_name", "last_name", "username")
    @classmethod
    def _not_blank(cls, v: str | None, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str:
        return normalise_email(v)

    @field_validator("role", "is_active", "password")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} must not be null")
        if info.field_name == "role":
            return _validate_role(v)
        if info.field_name == "password":
            return check_password(v)
        return v
