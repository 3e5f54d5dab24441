"""Service test fixtures — async DB, engines and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - store is a real DatabaseSessionManager bound to the test engine
    - get_store dependency and db_manager both point at the test store

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for engine and route tests
    - Manager built with __new__: skips pool sizing that SQLite memory pools reject
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from friendgraph.api.dependencies import get_store
from friendgraph.db.base import Base
from friendgraph.infrastructure.database import DatabaseSessionManager
import friendgraph.infrastructure.database as db_module
from friendgraph.main import app
from friendgraph.services.query_engine import QueryEngine
from friendgraph.services.relationship_engine import RelationshipEngine


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def store(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def relationships(store):
    return RelationshipEngine(store)


@pytest.fixture
def queries(store):
    return QueryEngine(store)


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store

    original_manager = db_module.db_manager
    db_module.db_manager = store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def count_rows(store):
    """Return an async counter: await count_rows(Model) -> int."""
    async def _count(model) -> int:
        async with store.session() as db:
            result = await db.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count

