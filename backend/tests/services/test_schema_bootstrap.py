"""Schema Bootstrap & Migrate CLI — bounded wait for the database, then create_all.

Tests cover:
    - retries with backoff until the probe succeeds, then creates the schema
    - gives up with DatabaseError after max_retries
    - backoff is capped and jittered within ±25%
    - create_schema is idempotent on a real engine
    - --version prints and exits 0
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from friendgraph import migrate
from friendgraph.core.errors import DatabaseError
from friendgraph.infrastructure import schema_bootstrap
from friendgraph.infrastructure.schema_bootstrap import SchemaBootstrapper


def _fake_manager(probe_results):
    manager = MagicMock()
    manager.health_check = AsyncMock(side_effect=probe_results)
    manager.create_schema = AsyncMock()
    return manager


@pytest.fixture
def no_sleep(monkeypatch):
    sleep = AsyncMock()
    monkeypatch.setattr(schema_bootstrap.asyncio, "sleep", sleep)
    return sleep


async def test_bootstrap_retries_until_database_ready(no_sleep):
    manager = _fake_manager([False, False, True])

    await SchemaBootstrapper(manager, max_retries=5).run()

    assert manager.health_check.await_count == 3
    assert no_sleep.await_count == 2
    manager.create_schema.assert_awaited_once()


async def test_bootstrap_gives_up_after_max_retries(no_sleep):
    manager = _fake_manager([False] * 4)

    with pytest.raises(DatabaseError) as exc_info:
        await SchemaBootstrapper(manager, max_retries=3).run()

    assert exc_info.value.operation == "connect"
    assert manager.health_check.await_count == 4
    assert no_sleep.await_count == 3
    manager.create_schema.assert_not_awaited()


def test_backoff_is_capped_and_jittered():
    bootstrapper = SchemaBootstrapper(
        MagicMock(), base_delay_ms=100, max_delay_ms=1000,
    )
    for attempt in range(10):
        expected = min(1000, (2 ** attempt) * 100)
        delay = bootstrapper._backoff(attempt)
        assert expected * 0.75 <= delay <= expected * 1.25


async def test_create_schema_is_idempotent(store):
    await store.create_schema()
    await store.create_schema()
    assert await store.health_check()


def test_migrate_version_flag(capsys):
    assert migrate.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "friendgraph version development"
