"""
In-memory repository — the single owner of every entity collection.

One ``MemStorage`` is built per application (see ``create_app``) and handed
to the endpoints through a dependency, so tests get a clean store each time.
Nothing here survives a restart.

Id counters are per collection, start at 1 and are never reused.  Case and
OB numbers embed the creation year but their numeric suffix is the entity id,
so the visible sequence does not restart on 1 January.
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any, TypeVar

from police_records.core.exceptions import ConflictError, NotFoundError
from police_records.models.case import Case, format_case_number
from police_records.models.license_plate import LicensePlate
from police_records.models.ob_entry import OBEntry, format_ob_number
from police_records.models.password_reset import PasswordResetToken
from police_records.models.user import User, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]

DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)

# Fields the store assigns itself; partial updates never overwrite them.
_USER_PROTECTED = frozenset({"id", "created_at", "updated_at", "last_login_at"})
_CASE_PROTECTED = frozenset({"id", "case_number", "created_by_id", "created_at", "updated_at"})
_OB_PROTECTED = frozenset({"id", "ob_number", "recording_officer_id", "created_at", "updated_at"})
_PLATE_PROTECTED = frozenset({"id", "added_by_id", "created_at", "updated_at"})


def _merge(record: T, changes: Mapping[str, Any], protected: Iterable[str], now: datetime) -> T:
    """Return a copy of *record* with *changes* applied and ``updated_at`` refreshed."""
    blocked = set(protected)
    allowed = {k: v for k, v in changes.items() if k not in blocked}
    return dataclasses.replace(record, **allowed, updated_at=now)  # type: ignore[type-var]


class MemStorage:
    """Dict-backed store for users, cases, OB entries, plates and reset tokens."""

    def __init__(
        self,
        clock: Clock = utcnow,
        reset_token_ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
    ) -> None:
        self._clock = clock
        self._reset_token_ttl = reset_token_ttl
        self._lock = threading.RLock()

        self._users: dict[int, User] = {}
        self._cases: dict[int, Case] = {}
        self._ob_entries: dict[int, OBEntry] = {}
        self._license_plates: dict[int, LicensePlate] = {}
        self._reset_tokens: dict[str, PasswordResetToken] = {}

        self._user_ids = itertools.count(1)
        self._case_ids = itertools.count(1)
        self._ob_ids = itertools.count(1)
        self._plate_ids = itertools.count(1)

    def now(self) -> datetime:
        return self._clock()

    # ── Uniqueness ──────────────────────────────────────────────────
    def ensure_user_identity_available(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> None:
        """Raise ``ConflictError`` if another user already holds *username* or *email*.

        Every user write runs this under the store lock; handlers may also
        call it up front to fail before doing expensive work such as hashing.
        """
        with self._lock:
            if username is not None:
                existing = self.get_user_by_username(username)
                if existing is not None and existing.id != exclude_id:
                    raise ConflictError("Username already exists")
            if email is not None:
                existing = self.get_user_by_email(email)
                if existing is not None and existing.id != exclude_id:
                    raise ConflictError("Email already exists")

    def ensure_plate_number_available(
        self, plate_number: str | None, exclude_id: int | None = None
    ) -> None:
        if plate_number is None:
            return
        with self._lock:
            existing = self.get_license_plate_by_number(plate_number)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"License plate '{plate_number}' already registered")

    # ── Users ───────────────────────────────────────────────────────
    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def get_user_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, data: Mapping[str, Any]) -> User:
        fields = {k: v for k, v in data.items() if k not in _USER_PROTECTED}
        fields.setdefault("is_active", True)
        with self._lock:
            self.ensure_user_identity_available(
                username=fields.get("username"), email=fields.get("email")
            )
            now = self.now()
            user = User(
                id=next(self._user_ids),
                **fields,
                created_at=now,
                updated_at=now,
                last_login_at=None,
            )
            self._users[user.id] = user
        logger.debug("Stored user %d (%s)", user.id, user.username)
        return user

    def update_user(self, user_id: int, changes: Mapping[str, Any]) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError("User not found")
            self.ensure_user_identity_available(
                username=changes.get("username"),
                email=changes.get("email"),
                exclude_id=user_id,
            )
            updated = _merge(user, changes, _USER_PROTECTED, self.now())
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def update_last_login(self, user_id: int) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                user.last_login_at = self.now()

    def get_all_users(self) -> list[User]:
        return list(self._users.values())

    def update_user_password(self, user_id: int, hashed_password: str) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFoundError("User not found")
            user.hashed_password = hashed_password
            user.updated_at = self.now()

    # ── Password reset tokens ───────────────────────────────────────
    def create_password_reset_token(self, user_id: int, token: str) -> PasswordResetToken:
        with self._lock:
            now = self.now()
            expired = [t for t, r in self._reset_tokens.items() if r.is_expired(now)]
            for t in expired:
                del self._reset_tokens[t]
            record = PasswordResetToken(
                token=token,
                user_id=user_id,
                expires_at=now + self._reset_token_ttl,
            )
            self._reset_tokens[token] = record
            return record

    def get_password_reset_token(self, token: str) -> PasswordResetToken | None:
        """Return the token record, or ``None`` if unknown or expired."""
        with self._lock:
            record = self._reset_tokens.get(token)
            if record is None:
                return None
            if record.is_expired(self.now()):
                del self._reset_tokens[token]
                return None
            return record

    def delete_password_reset_token(self, token: str) -> None:
        with self._lock:
            self._reset_tokens.pop(token, None)

    def count_password_reset_tokens(self) -> int:
        return len(self._reset_tokens)

    # ── Cases ───────────────────────────────────────────────────────
    def get_cases(self) -> list[Case]:
        return list(self._cases.values())

    def get_case(self, case_id: int) -> Case | None:
        return self._cases.get(case_id)

    def create_case(self, data: Mapping[str, Any], created_by_id: int) -> Case:
        fields = {k: v for k, v in data.items() if k not in _CASE_PROTECTED}
        with self._lock:
            now = self.now()
            case_id = next(self._case_ids)
            case = Case(
                id=case_id,
                case_number=format_case_number(now.year, case_id),
                created_by_id=created_by_id,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._cases[case_id] = case
            return case

    def update_case(self, case_id: int, changes: Mapping[str, Any]) -> Case:
        with self._lock:
            case = self._cases.get(case_id)
            if case is None:
                raise NotFoundError("Case not found")
            updated = _merge(case, changes, _CASE_PROTECTED, self.now())
            self._cases[case_id] = updated
            return updated

    def delete_case(self, case_id: int) -> None:
        with self._lock:
            if self._cases.pop(case_id, None) is None:
                raise NotFoundError("Case not found")

    # ── Occurrence Book ─────────────────────────────────────────────
    def get_ob_entries(self) -> list[OBEntry]:
        return list(self._ob_entries.values())

    def get_ob_entry(self, entry_id: int) -> OBEntry | None:
        return self._ob_entries.get(entry_id)

    def create_ob_entry(self, data: Mapping[str, Any], recording_officer_id: int) -> OBEntry:
        fields = {k: v for k, v in data.items() if k not in _OB_PROTECTED}
        with self._lock:
            now = self.now()
            if fields.get("date_time") is None:
                fields["date_time"] = now
            if fields.get("status") is None:
                fields["status"] = "recorded"
            entry_id = next(self._ob_ids)
            entry = OBEntry(
                id=entry_id,
                ob_number=format_ob_number(now.year, entry_id),
                recording_officer_id=recording_officer_id,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._ob_entries[entry_id] = entry
            return entry

    def update_ob_entry(self, entry_id: int, changes: Mapping[str, Any]) -> OBEntry:
        with self._lock:
            entry = self._ob_entries.get(entry_id)
            if entry is None:
                raise NotFoundError("OB Entry not found")
            updated = _merge(entry, changes, _OB_PROTECTED, self.now())
            self._ob_entries[entry_id] = updated
            return updated

    def delete_ob_entry(self, entry_id: int) -> None:
        with self._lock:
            if self._ob_entries.pop(entry_id, None) is None:
                raise NotFoundError("OB Entry not found")

    # ── License plates ──────────────────────────────────────────────
    def get_license_plates(self) -> list[LicensePlate]:
        return list(self._license_plates.values())

    def get_license_plate(self, plate_id: int) -> LicensePlate | None:
        return self._license_plates.get(plate_id)

    def get_license_plate_by_number(self, plate_number: str) -> LicensePlate | None:
        return next(
            (p for p in self._license_plates.values() if p.plate_number == plate_number),
            None,
        )

    def create_license_plate(self, data: Mapping[str, Any], added_by_id: int) -> LicensePlate:
        fields = {k: v for k, v in data.items() if k not in _PLATE_PROTECTED}
        with self._lock:
            self.ensure_plate_number_available(fields.get("plate_number"))
            now = self.now()
            plate = LicensePlate(
                id=next(self._plate_ids),
                added_by_id=added_by_id,
                created_at=now,
                updated_at=now,
                **fields,
            )
            self._license_plates[plate.id] = plate
            return plate

    def update_license_plate(self, plate_id: int, changes: Mapping[str, Any]) -> LicensePlate:
        with self._lock:
            plate = self._license_plates.get(plate_id)
            if plate is None:
                raise NotFoundError("License plate not found")
            self.ensure_plate_number_available(changes.get("plate_number"), exclude_id=plate_id)
            updated = _merge(plate, changes, _PLATE_PROTECTED, self.now())
            self._license_plates[plate_id] = updated
            return updated

    def delete_license_plate(self, plate_id: int) -> None:
        with self._lock:
            if self._license_plates.pop(plate_id, None) is None:
                raise NotFoundError("License plate not found")
