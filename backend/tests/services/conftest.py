"""Service test fixtures — in-memory repository and a repository that fails on demand.

Design Decisions:
    - Real InMemoryModuleRepository over mocks: the service is tested against the contract
    - failing_repo wraps the real store and raises DatabaseError from chosen methods
"""

import pytest

from app.core.errors import DatabaseError
from app.infrastructure.module_store_memory import InMemoryModuleRepository
from app.services.module_service import ModuleService


class FailingRepository(InMemoryModuleRepository):
    """Raises DatabaseError from the methods named in fail_on."""

    def __init__(self, fail_on: set[str]):
        super().__init__()
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def is_module_name_exists(self, name, exclude_id=0):
        self.calls.append("is_module_name_exists")
        if "is_module_name_exists" in self.fail_on:
            raise DatabaseError("connection reset", "execute")
        return await super().is_module_name_exists(name, exclude_id)

    async def create_module(self, entity):
        self.calls.append("create_module")
        if "create_module" in self.fail_on:
            raise DatabaseError("Integrity constraint violated", "commit")
        return await super().create_module(entity)


@pytest.fixture
def repo():
    return InMemoryModuleRepository()


@pytest.fixture
def service(repo):
    return ModuleService(repo)


@pytest.fixture
def failing_repo_factory():
    return FailingRepository
