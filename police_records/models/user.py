"""
User model — officers and administrators, with role-based access control.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

ROLE_ADMIN = "admin"
ROLE_USER = "user"
VALID_ROLES = {ROLE_ADMIN, ROLE_USER}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    id: int
    username: str
    email: str
    hashed_password: str
    first_name: str
    last_name: str
    role: str = ROLE_USER  # admin | user
    badge_number: str | None = None
    department: str | None = None
    position: str | None = None
    phone: str | None = None
    profile_image: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    last_login_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
