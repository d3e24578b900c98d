"""
Case model — an investigation tracked from opening to closure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CASE_NUMBER_PREFIX = "CASE"


def format_case_number(year: int, case_id: int) -> str:
    """``CASE-2025-007``: the suffix is the case id, not a per-year sequence."""
    return f"{CASE_NUMBER_PREFIX}-{year}-{case_id:03d}"


@dataclass
class Case:
    id: int
    case_number: str
    title: str
    created_by_id: int
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    status: str = "open"  # open | in_progress | closed
    priority: str = "medium"  # low | medium | high | critical
    assigned_officer_id: int | None = None
