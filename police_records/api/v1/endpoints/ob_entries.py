"""
Occurrence Book endpoints — the station's running incident log.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from police_records.api.v1.deps import get_current_session, get_storage
from police_records.core.exceptions import NotFoundError
from police_records.core.sessions import Session
from police_records.db.storage import MemStorage
from police_records.schemas.common import MessageResponse
from police_records.schemas.ob_entry import (OBEntryCreate, OBEntryEnvelope,
                                             OBEntryListEnvelope, OBEntryRead,
                                             OBEntryUpdate)

router = APIRouter(prefix="/ob-entries", tags=["ob-entries"])
logger = logging.getLogger(__name__)


@router.get("", response_model=OBEntryListEnvelope)
async def list_ob_entries(
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    return {"ob_entries": [OBEntryRead.model_validate(e) for e in storage.get_ob_entries()]}


@router.post("", response_model=OBEntryEnvelope, status_code=201)
async def create_ob_entry(
    body: OBEntryCreate,
    storage: MemStorage = Depends(get_storage),
    session: Session = Depends(get_current_session),
) -> dict:
    entry = storage.create_ob_entry(body.model_dump(), recording_officer_id=session.user_id)
    logger.info("Recorded %s (%s) by user %d", entry.ob_number, entry.type, session.user_id)
    return {"ob_entry": OBEntryRead.model_validate(entry)}


@router.get("/{entry_id}", response_model=OBEntryEnvelope)
async def get_ob_entry(
    entry_id: int,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    entry = storage.get_ob_entry(entry_id)
    if entry is None:
        raise NotFoundError("OB Entry not found")
    return {"ob_entry": OBEntryRead.model_validate(entry)}


@router.put("/{entry_id}", response_model=OBEntryEnvelope)
async def update_ob_entry(
    entry_id: int,
    body: OBEntryUpdate,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    entry = storage.update_ob_entry(entry_id, body.model_dump(exclude_unset=True))
    logger.info("Updated OB entry %d", entry_id)
    return {"ob_entry": OBEntryRead.model_validate(entry)}


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_ob_entry(
    entry_id: int,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> MessageResponse:
    storage.delete_ob_entry(entry_id)
    logger.info("Deleted OB entry %d", entry_id)
    return MessageResponse(message="OB Entry deleted successfully")
