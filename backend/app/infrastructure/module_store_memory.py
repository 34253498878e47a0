"""In-Memory Module Repository — dict-backed ModuleRepository for single-process deployments.

Invariants:
    - Exactly one lock guards both the record dict and the id counter
    - Every operation holds the lock for its full duration, reads included
    - Ids start at 1 and only ever increase; a stored record is never replaced

Design Decisions:
    - threading.Lock over asyncio.Lock: critical sections never await, and the store stays
      safe when called from worker threads as well as the event loop
    - State lost on restart: acceptable for the default development backend
"""

import threading
from dataclasses import replace

from app.core.domain_types import Module, ModuleId, name_key, parse_module_id


class InMemoryModuleRepository:
    """ModuleRepository backed by a process-local dict."""

    def __init__(self):
        self._lock = threading.Lock()
        self._data: dict[ModuleId, Module] = {}
        self._next_id = 1

    async def create_module(self, entity: Module) -> Module:
        with self._lock:
            stored = replace(entity, id=ModuleId(self._next_id))
            self._next_id += 1
            self._data[stored.id] = stored
            return stored

    async def is_module_name_exists(
        self, name: str, exclude_id: ModuleId | int = 0,
    ) -> bool:
        with self._lock:
            wanted = name_key(name)
            if not wanted:
                return False
            return any(
                name_key(module.name) == wanted
                for module_id, module in self._data.items()
                if not (exclude_id > 0 and module_id == exclude_id)
            )

    async def get_module_by_id(self, raw_id: str | int) -> Module | None:
        with self._lock:
            return self._data.get(parse_module_id(raw_id))
