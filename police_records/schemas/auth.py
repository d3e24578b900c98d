"""Pydantic schemas for login and the password-reset flow."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from police_records.schemas.common import CamelModel
from police_records.schemas.user import MIN_PASSWORD_LENGTH, check_password


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ForgotPasswordRequest(BaseModel):
    username: str = Field(min_length=1)


class ForgotPasswordResponse(BaseModel):
    message: str
    token: str | None = None


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)  # type: ignore[return-value]

    @model_validator(mode="after")
    def _passwords_match(self) -> "ResetPasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self
