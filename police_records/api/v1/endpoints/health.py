"""
Public health check.
"""

from __future__ import annotations

from fastapi import APIRouter

from police_records.core.config import settings
from police_records.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=settings.VERSION)
