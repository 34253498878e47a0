"""Domain Types — the Module entity and the identifier/length rules around it.

Invariants:
    - Module is immutable once built: id and created_at never change after persistence
    - ModuleId wraps int — parse_module_id is the only way raw path text becomes an id
    - Length limits live here once; schemas, service and ORM all read them
    - name_key is the single definition of "same name"; both repositories compare by it

Design Decisions:
    - Frozen dataclass over ORM row as the entity: both repositories return the same type
      (ADR: storage representation never leaks past the repository)
    - NewType over wrapper class: zero runtime cost, full type-checker support
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NewType

from app.core.errors import InvalidModuleIdError


# ─── Identity Types ──────────────────────────────────────────────

ModuleId = NewType("ModuleId", int)

# Same range as a signed 64-bit integer column
MAX_MODULE_ID = 2**63 - 1


# ─── Business Limits ─────────────────────────────────────────────

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


# ─── Entity ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Module:
    """Persisted module record. id is None until a repository assigns one."""
    name: str
    description: str
    is_active: bool
    created_at: datetime
    id: ModuleId | None = None


_ID_PATTERN = re.compile(r"[+-]?\d+")


def parse_module_id(raw_id: str | int) -> ModuleId:
    """Parse a path identifier into a ModuleId.

    Raises InvalidModuleIdError for anything that is not a base-10 integer
    within the signed 64-bit range. Non-positive values parse fine; they
    simply never match a stored record.
    """
    if isinstance(raw_id, bool):
        raise InvalidModuleIdError(str(raw_id))
    if isinstance(raw_id, int):
        value = raw_id
    elif isinstance(raw_id, str) and _ID_PATTERN.fullmatch(raw_id):
        value = int(raw_id)
    else:
        raise InvalidModuleIdError(str(raw_id))
    if abs(value) > MAX_MODULE_ID:
        raise InvalidModuleIdError(str(raw_id))
    return ModuleId(value)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def name_key(name: str) -> str:
    """Case-insensitive uniqueness key for a module name.

    Computed in Python so every backend folds case the same way; SQLite's
    lower() only folds ASCII.
    """
    return name.strip().lower()
