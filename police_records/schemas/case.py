"""Pydantic schemas for cases."""

from __future__ import annotations

from datetime import datetime

from pydantic import field_validator

from police_records.schemas.common import CamelModel, require_text


class CaseCreate(CamelModel):
    title: str
    description: str | None = None
    status: str = "open"
    priority: str = "medium"
    assigned_officer_id: int | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class CaseUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assigned_officer_id: int | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def _not_blank(cls, v: str | None, info) -> str:
        return require_text(v, info.field_name)


class CaseRead(CamelModel):
    id: int
    case_number: str
    title: str
    description: str | None
    status: str
    priority: str
    assigned_officer_id: int | None
    created_by_id: int
    created_at: datetime
    updated_at: datetime


class CaseEnvelope(CamelModel):
    case: CaseRead


class CaseListEnvelope(CamelModel):
    cases: list[CaseRead]
