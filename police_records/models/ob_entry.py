"""
Occurrence Book entry — one line of the station's incident log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

OB_NUMBER_PREFIX = "OB"


def format_ob_number(year: int, entry_id: int) -> str:
    return f"{OB_NUMBER_PREFIX}/{year}/{entry_id:04d}"


@dataclass
class OBEntry:
    id: int
    ob_number: str
    date_time: datetime
    type: str
    description: str
    reported_by: str
    recording_officer_id: int
    created_at: datetime
    updated_at: datetime
    location: str | None = None
    status: str = "recorded"
