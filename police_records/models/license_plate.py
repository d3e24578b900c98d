"""
License plate registry record — a plate and the identity of its owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class LicensePlate:
    id: int
    plate_number: str
    owner_name: str
    added_by_id: int
    created_at: datetime
    updated_at: datetime
    father_name: str | None = None
    mother_name: str | None = None
    id_number: str | None = None
    passport_number: str | None = None
    owner_image: str | None = None
