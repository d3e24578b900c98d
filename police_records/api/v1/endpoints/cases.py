"""
Case CRUD endpoints — open to any authenticated user.

Case numbers and the author id are assigned server side.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from police_records.api.v1.deps import get_current_session, get_storage
from police_records.core.exceptions import NotFoundError
from police_records.core.sessions import Session
from police_records.db.storage import MemStorage
from police_records.schemas.case import (CaseCreate, CaseEnvelope,
                                         CaseListEnvelope, CaseRead,
                                         CaseUpdate)
from police_records.schemas.common import MessageResponse

router = APIRouter(prefix="/cases", tags=["cases"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CaseListEnvelope)
async def list_cases(
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    return {"cases": [CaseRead.model_validate(c) for c in storage.get_cases()]}


@router.post("", response_model=CaseEnvelope, status_code=201)
async def create_case(
    body: CaseCreate,
    storage: MemStorage = Depends(get_storage),
    session: Session = Depends(get_current_session),
) -> dict:
    case = storage.create_case(body.model_dump(), created_by_id=session.user_id)
    logger.info("Created case %s (id %d) by user %d", case.case_number, case.id, session.user_id)
    return {"case": CaseRead.model_validate(case)}


@router.get("/{case_id}", response_model=CaseEnvelope)
async def get_case(
    case_id: int,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    case = storage.get_case(case_id)
    if case is None:
        raise NotFoundError("Case not found")
    return {"case": CaseRead.model_validate(case)}


@router.put("/{case_id}", response_model=CaseEnvelope)
async def update_case(
    case_id: int,
    body: CaseUpdate,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    case = storage.update_case(case_id, body.model_dump(exclude_unset=True))
    logger.info("Updated case %d", case_id)
    return {"case": CaseRead.model_validate(case)}


@router.delete("/{case_id}", response_model=MessageResponse)
async def delete_case(
    case_id: int,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> MessageResponse:
    storage.delete_case(case_id)
    logger.info("Deleted case %d", case_id)
    return MessageResponse(message="Case deleted successfully")
