"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from police_records.api.v1.endpoints import (auth, cases, health,
                                             license_plates, ob_entries,
                                             profile, users)

api_router = APIRouter()

# Auth (login, logout, registration, password reset)
api_router.include_router(auth.router)

# Own profile; user & officer administration
api_router.include_router(profile.router)
api_router.include_router(users.router)

# Records
api_router.include_router(cases.router)
api_router.include_router(ob_entries.router)
api_router.include_router(license_plates.router)

api_router.include_router(health.router)
