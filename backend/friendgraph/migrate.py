"""Migrate CLI — wait for the database, create the schema, exit.

Usage:
    python -m friendgraph.migrate            # bootstrap schema
    python -m friendgraph.migrate --version  # print version and exit

Invariants:
    - Exit code 0 on success, 1 when the database stays unreachable or DDL fails
    - Uses the same settings and logging setup as the API process
"""

import argparse
import asyncio
import logging
import sys

from friendgraph.config import get_settings
from friendgraph.core.errors import DatabaseError
from friendgraph.infrastructure.database import DatabaseSessionManager
from friendgraph.infrastructure.observability import setup_logging
from friendgraph.infrastructure.schema_bootstrap import SchemaBootstrapper

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="friendgraph.migrate",
        description="Create the friend-graph database schema.",
    )
    parser.add_argument(
        "--version", action="store_true",
        help="print version information and exit",
    )
    return parser.parse_args(argv)


async def _run() -> None:
    settings = get_settings()
    manager = DatabaseSessionManager(
        settings.database_url, echo=settings.database_echo,
    )
    bootstrapper = SchemaBootstrapper(
        manager,
        max_retries=settings.startup_max_retries,
        base_delay_ms=settings.startup_base_delay_ms,
        max_delay_ms=settings.startup_max_delay_ms,
    )
    try:
        await bootstrapper.run()
    finally:
        await manager.dispose()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    if args.version:
        print(f"{settings.app_name} version {settings.app_version}")
        return 0

    setup_logging(settings.log_level, settings.log_format)
    logger.info("Running db migration")
    try:
        asyncio.run(_run())
    except DatabaseError as e:
        logger.error(f"Migration failed: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
