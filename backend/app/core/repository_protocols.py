"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Storage accessed only through ModuleRepository
    - Implementations provided by shell via dependency injection (app.main.create_app)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: the SQL implementation does IO; the in-memory one simply never awaits
"""

from typing import Protocol

from app.core.domain_types import Module, ModuleId


class ModuleRepository(Protocol):
    """Contract for module persistence — implemented by shell.

    create_module assigns a fresh, monotonically increasing id and fails only on
    storage faults (DatabaseError), never on business rules.

    is_module_name_exists compares case-insensitively on the trimmed name. A
    positive exclude_id leaves that record out of the comparison. An empty name
    is never found.

    get_module_by_id returns None for a missing record and raises
    InvalidModuleIdError for identifier text that is not an integer.
    """
    async def create_module(self, entity: Module) -> Module: ...
    async def is_module_name_exists(
        self, name: str, exclude_id: ModuleId | int = 0,
    ) -> bool: ...
    async def get_module_by_id(self, raw_id: str | int) -> Module | None: ...
