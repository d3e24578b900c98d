"""
License plate registry endpoints.

Plate numbers are unique: a create (or a rename) that collides with an
existing plate is rejected with 409, never overwritten.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from police_records.api.v1.deps import get_current_session, get_storage
from police_records.core.exceptions import NotFoundError
from police_records.core.sessions import Session
from police_records.db.storage import MemStorage
from police_records.models.license_plate import LicensePlate
from police_records.schemas.common import MessageResponse
from police_records.schemas.license_plate import (LicensePlateCreate,
                                                  LicensePlateEnvelope,
                                                  LicensePlateListEnvelope,
                                                  LicensePlateRead,
                                                  LicensePlateUpdate)

router = APIRouter(prefix="/license-plates", tags=["license-plates"])
logger = logging.getLogger(__name__)


def _envelope(plate: LicensePlate | None) -> dict:
    if plate is None:
        raise NotFoundError("License plate not found")
    return {"license_plate": LicensePlateRead.model_validate(plate)}


@router.get("", response_model=LicensePlateListEnvelope)
async def list_license_plates(
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    return {
        "license_plates": [
            LicensePlateRead.model_validate(p) for p in storage.get_license_plates()
        ]
    }


@router.post("", response_model=LicensePlateEnvelope, status_code=201)
async def create_license_plate(
    body: LicensePlateCreate,
    storage: MemStorage = Depends(get_storage),
    session: Session = Depends(get_current_session),
) -> dict:
    plate = storage.create_license_plate(body.model_dump(), added_by_id=session.user_id)
    logger.info("Registered plate %s (id %d) by user %d", plate.plate_number, plate.id, session.user_id)
    return _envelope(plate)


@router.get("/search/{plate_number}", response_model=LicensePlateEnvelope)
async def search_license_plate(
    plate_number: str,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    return _envelope(storage.get_license_plate_by_number(plate_number))


@router.get("/{plate_key}", response_model=LicensePlateEnvelope)
async def get_license_plate(
    plate_key: str,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    """Look a plate up by id, or by plate number.

    An all-digit key is tried as an id first, then as a plate number.
    """
    plate = None
    if plate_key.isdigit():
        plate = storage.get_license_plate(int(plate_key))
    if plate is None:
        plate = storage.get_license_plate_by_number(plate_key)
    return _envelope(plate)


@router.put("/{plate_id}", response_model=LicensePlateEnvelope)
async def update_license_plate(
    plate_id: int,
    body: LicensePlateUpdate,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> dict:
    changes = body.model_dump(exclude_unset=True)
    plate = storage.update_license_plate(plate_id, changes)
    logger.info("Updated plate %d", plate_id)
    return _envelope(plate)


@router.delete("/{plate_id}", response_model=MessageResponse)
async def delete_license_plate(
    plate_id: int,
    storage: MemStorage = Depends(get_storage),
    _session: Session = Depends(get_current_session),
) -> MessageResponse:
    storage.delete_license_plate(plate_id)
    logger.info("Deleted plate %d", plate_id)
    return MessageResponse(message="License plate deleted successfully")
