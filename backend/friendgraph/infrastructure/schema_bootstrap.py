"""Schema Bootstrap — waits for the database with bounded backoff, then creates tables.

Invariants:
    - At most max_retries + 1 connection attempts, then DatabaseError
    - Backoff is exponential with ±25% jitter, capped at max_delay_ms
    - Only runs at process startup (migrate CLI); engines never retry

Design Decisions:
    - Retry wraps the readiness probe, not create_all: a schema error is not transient
    - Jitter: several replicas starting together do not hammer the database in lockstep
"""

import asyncio
import logging
import random

from friendgraph.core.errors import DatabaseError
from friendgraph.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


class SchemaBootstrapper:
    """Bounded wait-for-database followed by metadata create_all."""

    def __init__(
        self,
        manager: DatabaseSessionManager,
        max_retries: int = 5,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
    ):
        self.manager = manager
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def wait_for_database(self) -> None:
        """Probe connectivity until it succeeds or retries are exhausted."""
        for attempt in range(self.max_retries + 1):
            if await self.manager.health_check():
                logger.info(
                    "Database reachable", extra={"attempt": attempt + 1},
                )
                return
            if attempt >= self.max_retries:
                break
            delay = self._backoff(attempt)
            logger.warning(
                f"Database not reachable, retry after {delay}ms",
                extra={"attempt": attempt + 1},
            )
            await asyncio.sleep(delay / 1000)
        raise DatabaseError(
            f"Database unreachable after {self.max_retries} retries", "connect",
        )

    async def run(self) -> None:
        await self.wait_for_database()
        await self.manager.create_schema()
        logger.info("Done running db migration")

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311
