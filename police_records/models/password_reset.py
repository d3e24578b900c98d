"""
Password reset token — single use, time limited.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PasswordResetToken:
    token: str
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
