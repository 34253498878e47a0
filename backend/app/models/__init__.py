"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave the repository; callers see core.domain_types.Module

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from app.models.module import ModuleRecord  # noqa: F401
