"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "Police Records Management System"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # ── Sessions ─────────────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "police_sid"
    SESSION_MAX_AGE_HOURS: int = 24
    COOKIE_SECURE: bool = False  # Set True in HTTPS production

    # ── Password reset ───────────────────────────────────────────────
    RESET_TOKEN_TTL_MINUTES: int = 60
    # No outbound mail channel: the token is echoed to the caller.
    EXPOSE_RESET_TOKEN: bool = True

    # ── Security ─────────────────────────────────────────────────────
    BCRYPT_ROUNDS: int = 12
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "5/minute"
    FORGOT_PASSWORD_RATE_LIMIT: str = "5/minute"

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5000",
        "http://127.0.0.1:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── Default admin (seeded into every fresh store) ───────────────
    FIRST_ADMIN_USERNAME: str = "admin"
    FIRST_ADMIN_EMAIL: str = "admin@police.gov"
    FIRST_ADMIN_PASSWORD: str = "admin123"

    # Officers created without a password get this one
    DEFAULT_OFFICER_PASSWORD: str = "changeme123"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

if settings.FIRST_ADMIN_PASSWORD == "admin123":
    import logging

    logging.getLogger("police_records.core.config").warning(
        "⚠️  WARNING: The default admin password is in use! "
        "Set FIRST_ADMIN_PASSWORD in your .env file."
    )
