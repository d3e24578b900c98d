"""Shared schema plumbing: camelCase wire format and generic responses."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (both accepted on input)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str


def require_text(v: str | None, field: str) -> str:
    """Strip *v* and reject ``None`` or blank values."""
    if v is None:
        raise ValueError(f"{field} must not be null")
    v = v.strip()
    if not v:
        raise ValueError(f"{field} must not be empty")
    return v


def normalise_email(v: str | None) -> str:
    v = require_text(v, "Email").lower()
    if "@" not in v:
        raise ValueError("Invalid email address")
    return v
