"""Pydantic schemas for the license plate registry."""

from __future__ import annotations

from datetime import datetime

from pydantic import field_validator

from police_records.schemas.common import CamelModel, require_text


class LicensePlateCreate(CamelModel):
    plate_number: str
    owner_name: str
    father_name: str | None = None
    mother_name: str | None = None
    id_number: str | None = None
    passport_number: str | None = None
    owner_image: str | None = None

    @field_validator("plate_number", "owner_name")
    @classmethod
    def _not_blank(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class LicensePlateUpdate(CamelModel):
    plate_number: str | None = None
    owner_name: str | None = None
    father_name: str | None = None
    mother_name: str | None = None
    id_number: str | None = None
    passport_number: str | None = None
    owner_image: str | None = None

    @field_validator("plate_number", "owner_name")
    @classmethod
    def _not_blank(cls, v: str | None, info) -> str:
        return require_text(v, info.field_name)


class LicensePlateRead(CamelModel):
    id: int
    plate_number: str
    owner_name: str
    father_name: str | None
    mother_name: str | None
    id_number: str | None
    passport_number: str | None
    owner_image: str | None
    added_by_id: int
    created_at: datetime
    updated_at: datetime


class LicensePlateEnvelope(CamelModel):
    license_plate: LicensePlateRead


class LicensePlateListEnvelope(CamelModel):
    license_plates: list[LicensePlateRead]
