"""Route Dependencies — engine construction and per-operation time budget.

Invariants:
    - Engines receive the process DatabaseSessionManager (never a global inside the engine)
    - run_with_timeout cancels the operation on timeout; the cancelled transaction
      rolls back before OperationTimeoutError is raised

Design Decisions:
    - FastAPI Depends for engines: tests swap the store via dependency_overrides
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Depends

from friendgraph.config import get_settings
from friendgraph.core.errors import ErrorContext, OperationTimeoutError
from friendgraph.core.repository_protocols import TransactionalStore
from friendgraph.infrastructure.database import get_db_manager
from friendgraph.services.query_engine import QueryEngine
from friendgraph.services.relationship_engine import RelationshipEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_store() -> TransactionalStore:
    return get_db_manager()


def get_relationship_engine(
    store: TransactionalStore = Depends(get_store),
) -> RelationshipEngine:
    return RelationshipEngine(store)


def get_query_engine(
    store: TransactionalStore = Depends(get_store),
) -> QueryEngine:
    return QueryEngine(store)


async def run_with_timeout(operation: str, awaitable: Awaitable[T]) -> T:
    """Await an engine call within operation_timeout_seconds."""
    timeout = get_settings().operation_timeout_seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            f"Operation timed out after {timeout}s",
            extra={"operation": operation},
        )
        raise OperationTimeoutError(
            operation, timeout, ErrorContext(operation=operation),
        )
