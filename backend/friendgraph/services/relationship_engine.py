"""Relationship Engine — Connect, Subscribe and Block as atomic, idempotent units of work.

Invariants:
    - Self-reference rejected (InvalidRequestError) before any transaction opens
    - Exactly one transaction per call; commit on success, rollback on every error
    - connect: existing friendship is a no-op success; a block in EITHER direction
      raises ConflictError; otherwise both friend rows are written together
    - subscribe: only fails when the pair are already friends AND target blocks requester
    - block: never removes the friendship; between friends it drops the
      target -> requester subscription only
    - Re-issuing any operation never duplicates an edge or errors

Design Decisions:
    - Store injected at construction: no global connection factory
    - Resolver and edge store built per transaction, bound to its session
"""

import logging
from collections.abc import Callable

from friendgraph.core.domain_types import Operation
from friendgraph.core.errors import ConflictError, ErrorContext
from friendgraph.core.relationship_rules import check_distinct
from friendgraph.core.repository_protocols import (
    EdgeRepository, TransactionalStore, UserDirectory,
)
from friendgraph.services.edge_store import EdgeStore
from friendgraph.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)


class RelationshipEngine:
    """Mutating operations over the relationship graph."""

    def __init__(
        self,
        store: TransactionalStore,
        users: Callable[..., UserDirectory] = IdentityResolver,
        edges: Callable[..., EdgeRepository] = EdgeStore,
    ):
        self.store = store
        self.users = users
        self.edges = edges

    async def connect(self, email_a: str, email_b: str) -> None:
        """Create a mutual friendship between two users."""
        check_distinct(email_a, email_b, Operation.CONNECT)
        async with self.store.transaction() as db:
            users, edges = self.users(db), self.edges(db)
            first = await users.resolve(email_a)
            second = await users.resolve(email_b)

            if await edges.are_friends(first.id, second.id):
                logger.info(
                    "Already friends",
                    extra={"email": first.email, "target": second.email},
                )
                return

            if (
                await edges.has_block(first.id, second.id)
                or await edges.has_block(second.id, first.id)
            ):
                logger.warning(
                    "Friend connection rejected: blocked",
                    extra={"email": first.email, "target": second.email},
                )
                raise ConflictError(
                    "Friend connection is being blocked", "blocked",
                    ErrorContext(
                        operation=Operation.CONNECT.value,
                        emails=[first.email, second.email],
                    ),
                )

            if not await edges.add_friendship(first.id, second.id):
                logger.info(
                    "Already friends (written concurrently)",
                    extra={"email": first.email, "target": second.email},
                )
                return
            logger.info(
                "Friend connection created",
                extra={"email": first.email, "target": second.email},
            )

    async def subscribe(self, requester: str, target: str) -> None:
        """Subscribe requester to updates from target."""
        check_distinct(requester, target, Operation.SUBSCRIBE)
        async with self.store.transaction() as db:
            users, edges = self.users(db), self.edges(db)
            subscriber = await users.resolve(requester)
            publisher = await users.resolve(target)

            if (
                await edges.are_friends(subscriber.id, publisher.id)
                and await edges.has_block(publisher.id, subscriber.id)
            ):
                logger.warning(
                    "Subscription rejected: blocked by target",
                    extra={"email": subscriber.email, "target": publisher.email},
                )
                raise ConflictError(
                    "Requestor is being blocked by target", "blocked by target",
                    ErrorContext(
                        operation=Operation.SUBSCRIBE.value,
                        emails=[subscriber.email, publisher.email],
                    ),
                )

            created = await edges.add_subscription(subscriber.id, publisher.id)
            if created:
                logger.info(
                    "Subscription created",
                    extra={"email": subscriber.email, "target": publisher.email},
                )

    async def block(self, requester: str, target: str) -> None:
        """Block target on behalf of requester."""
        check_distinct(requester, target, Operation.BLOCK)
        async with self.store.transaction() as db:
            users, edges = self.users(db), self.edges(db)
            blocker = await users.resolve(requester)
            blocked = await users.resolve(target)

            if await edges.add_block(blocker.id, blocked.id):
                logger.info(
                    "Block created",
                    extra={"email": blocker.email, "target": blocked.email},
                )

            # Friendship stays; only target's feed of requester is cut
            if await edges.are_friends(blocker.id, blocked.id):
                removed = await edges.remove_subscription(blocked.id, blocker.id)
                if removed:
                    logger.info(
                        "Subscription removed by block",
                        extra={"email": blocked.email, "target": blocker.email},
                    )
