"""Module ORM — persists module records in the `modules` table.

Invariants:
    - id is a 64-bit identity primary key, never reused (sqlite_autoincrement)
    - name_key (domain_types.name_key of name) is unique: the database backs up the
      service's case-insensitive check
    - created_at is written once by the service and never updated

Design Decisions:
    - name_key computed in Python rather than a lower(name) expression index:
      SQLite's lower() folds ASCII only, so the database cannot be trusted to fold case
    - BigInteger with an Integer variant on SQLite: the full ModuleId range on PostgreSQL,
      while SQLite keeps the INTEGER PRIMARY KEY rowid that AUTOINCREMENT requires
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger, Boolean, DateTime, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.domain_types import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from app.db.base import Base

# str.lower() can turn one code point into two (U+0130)
NAME_KEY_MAX_LENGTH = NAME_MAX_LENGTH * 2

ModuleIdType = BigInteger().with_variant(Integer, "sqlite")


class ModuleRecord(Base):
    """Stored form of a Module."""
    __tablename__ = "modules"
    __table_args__ = (
        UniqueConstraint("name_key", name="uq_modules_name_key"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        ModuleIdType, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    name_key: Mapped[str] = mapped_column(
        String(NAME_KEY_MAX_LENGTH), nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=False, default="",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
