"""SQL Module Repository — ModuleRepository over SQLAlchemy async sessions.

Invariants:
    - One session per call; a failed call leaves nothing committed
    - Names compare by the stored name_key column, the same column the unique constraint covers
    - Rows are converted to core.domain_types.Module before leaving this module

Design Decisions:
    - DatabaseSessionManager injected at construction: no global engine lookup
    - No refresh after commit: id is populated on flush and created_at is the value we wrote
"""

import logging

from sqlalchemy import func, select

from app.core.domain_types import (
    Module, ModuleId, as_utc, name_key, parse_module_id,
)
from app.infrastructure.database import DatabaseSessionManager
from app.models.module import ModuleRecord

logger = logging.getLogger(__name__)


def _to_entity(record: ModuleRecord) -> Module:
    return Module(
        id=ModuleId(record.id),
        name=record.name,
        description=record.description,
        is_active=record.is_active,
        created_at=as_utc(record.created_at),
    )


class SqlModuleRepository:
    """ModuleRepository backed by a relational database."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def create_module(self, entity: Module) -> Module:
        async with self._db.session() as db:
            record = ModuleRecord(
                name=entity.name,
                name_key=name_key(entity.name),
                description=entity.description,
                is_active=entity.is_active,
                created_at=entity.created_at,
            )
            db.add(record)
            await db.commit()
            logger.info(f"Module {record.id} stored")
            return _to_entity(record)

    async def is_module_name_exists(
        self, name: str, exclude_id: ModuleId | int = 0,
    ) -> bool:
        wanted = name_key(name)
        if not wanted:
            return False
        query = (
            select(func.count())
            .select_from(ModuleRecord)
            .where(ModuleRecord.name_key == wanted)
        )
        if exclude_id > 0:
            query = query.where(ModuleRecord.id != exclude_id)
        async with self._db.session() as db:
            count = await db.scalar(query)
        return bool(count)

    async def get_module_by_id(self, raw_id: str | int) -> Module | None:
        module_id = parse_module_id(raw_id)
        async with self._db.session() as db:
            record = await db.get(ModuleRecord, module_id)
            return _to_entity(record) if record else None
