"""
Police Records Management — application entry point.

This is the **only** file that assembles the app.  The in-memory store and
the session store are built here and hung on ``app.state``; endpoints reach
them through the dependencies in ``api/v1/deps.py``.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from police_records.api.v1.api import api_router
from police_records.api.v1.endpoints.auth import limiter
from police_records.core.config import settings
from police_records.core.exceptions import register_exception_handlers
from police_records.core.security import get_password_hash
from police_records.core.sessions import SessionStore
from police_records.db.storage import MemStorage
from police_records.models.user import ROLE_ADMIN

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def seed_default_admin(storage: MemStorage) -> None:
    """Create the default admin account unless that username is taken."""
    if storage.get_user_by_username(settings.FIRST_ADMIN_USERNAME) is not None:
        return
    storage.create_user(
        {
            "username": settings.FIRST_ADMIN_USERNAME,
            "email": settings.FIRST_ADMIN_EMAIL,
            "hashed_password": get_password_hash(settings.FIRST_ADMIN_PASSWORD),
            "first_name": "System",
            "last_name": "Administrator",
            "role": ROLE_ADMIN,
            "badge_number": "ADMIN001",
            "department": "IT",
            "position": "System Administrator",
        }
    )
    logger.info(
        "Default admin created: %s (password: <redacted>)",
        settings.FIRST_ADMIN_USERNAME,
    )


# ── App factory ─────────────────────────────────────────────────────
def create_app(
    storage: MemStorage | None = None,
    sessions: SessionStore | None = None,
) -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Cases, occurrence book and license plate registry",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if storage is None:
        storage = MemStorage()
        seed_default_admin(storage)
    if sessions is None:
        sessions = SessionStore(max_age=timedelta(hours=settings.SESSION_MAX_AGE_HOURS))
    application.state.storage = storage
    application.state.sessions = sessions
    application.state.limiter = limiter

    # CORS (the client sends the session cookie)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    # Serve the built web client (must be last — catch-all mount)
    client_dir = Path(__file__).resolve().parent.parent / "client" / "dist"
    if client_dir.is_dir():
        application.mount(
            "/",
            StaticFiles(directory=str(client_dir), html=True),
            name="client",
        )
        logger.info("Client mounted from %s", client_dir)

    logger.info("🚀 %s v%s ready", settings.PROJECT_NAME, settings.VERSION)
    return application


app = create_app()
