"""Pydantic schemas for Occurrence Book entries."""

from __future__ import annotations

from datetime import datetime

from pydantic import field_validator

from police_records.schemas.common import CamelModel, require_text


class OBEntryCreate(CamelModel):
    type: str
    description: str
    reported_by: str
    location: str | None = None
    date_time: datetime | None = None

    @field_validator("type", "description", "reported_by")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class OBEntryUpdate(CamelModel):
    type: str | None = None
    description: str | None = None
    reported_by: str | None = None
    location: str | None = None
    status: str | None = None
    date_time: datetime | None = None

    @field_validator("type", "description", "reported_by", "status")
    @classmethod
    def _not_blank(cls, v: str | None, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("date_time")
    @classmethod
    def _not_null(cls, v: datetime | None) -> datetime:
        if v is None:
            raise ValueError("date_time must not be null")
        return v


class OBEntryRead(CamelModel):
    id: int
    ob_number: str
    date_time: datetime
    type: str
    description: str
    reported_by: str
    recording_officer_id: int
    location: str | None
    status: str
    created_at: datetime
    updated_at: datetime


class OBEntryEnvelope(CamelModel):
    ob_entry: OBEntryRead


class OBEntryListEnvelope(CamelModel):
    ob_entries: list[OBEntryRead]
