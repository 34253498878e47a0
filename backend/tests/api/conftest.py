"""API test fixtures — isolated FastAPI apps and httpx clients per storage backend.

Invariants:
    - Every test gets a fresh app, so ids restart at 1 and no names leak between tests
    - sql_client runs against an in-memory SQLite database with the schema created up front

Design Decisions:
    - ASGITransport does not run the lifespan: schema creation is done here explicitly
    - Settings built directly (no .env) so the developer environment never leaks in
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, log_format="text", **overrides)


@pytest.fixture
def memory_app():
    return create_app(_settings(repository_backend="memory"))


@pytest.fixture
async def sql_app():
    app = create_app(_settings(
        repository_backend="sql",
        database_url="sqlite+aiosqlite:///:memory:",
    ))
    await app.state.db_manager.create_schema()
    yield app
    await app.state.db_manager.dispose()


@pytest.fixture
async def client(memory_app):
    """Client for the default in-memory backend."""
    async with AsyncClient(
        transport=ASGITransport(app=memory_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def sql_client(sql_app):
    async with AsyncClient(
        transport=ASGITransport(app=sql_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture(params=["memory", "sql"])
async def any_client(request):
    """Same test against both repository implementations."""
    app = create_app(_settings(
        repository_backend=request.param,
        database_url="sqlite+aiosqlite:///:memory:",
    ))
    db_manager = app.state.db_manager
    if db_manager:
        await db_manager.create_schema()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    if db_manager:
        await db_manager.dispose()
