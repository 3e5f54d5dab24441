"""Query Engine — friend lists, common friends and notification recipients.

Invariants:
    - get_friends / get_common_friends never create users (ResourceNotFoundError instead)
    - get_common_friends is an exact set intersection regardless of list order
    - get_notification_recipients creates the sender if unknown, then returns
      friends, subscribers and mentions (first-seen order, no duplicates)
      minus every user who blocks the sender
    - Subscribers of S are all X with SubscriptionEdge(X -> S)

Design Decisions:
    - Read-only queries use a plain session; recipient resolution uses a transaction
      because resolving the sender may insert a row
    - List derivations delegated to core/relationship_rules.py (pure, unit-tested)
"""

import logging
from collections.abc import Callable

from friendgraph.core.domain_types import FriendList, Operation, UserRef
from friendgraph.core.email_address import extract_mentions, normalize_email
from friendgraph.core.errors import ErrorContext, ResourceNotFoundError
from friendgraph.core.relationship_rules import (
    check_distinct, intersect_friends, merge_recipients,
)
from friendgraph.core.repository_protocols import (
    EdgeRepository, TransactionalStore, UserDirectory,
)
from friendgraph.services.edge_store import EdgeStore
from friendgraph.services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)


class QueryEngine:
    """Read-side derivations over the relationship graph."""

    def __init__(
        self,
        store: TransactionalStore,
        users: Callable[..., UserDirectory] = IdentityResolver,
        edges: Callable[..., EdgeRepository] = EdgeStore,
    ):
        self.store = store
        self.users = users
        self.edges = edges

    async def get_friends(self, email: str) -> FriendList:
        async with self.store.session() as db:
            user = await _find_or_404(
                self.users(db), email, Operation.GET_FRIENDS,
            )
            friends = await self.edges(db).friend_emails(user.id)
        return FriendList(friends=friends)

    async def get_common_friends(self, email_a: str, email_b: str) -> FriendList:
        check_distinct(email_a, email_b, Operation.GET_COMMON_FRIENDS)
        async with self.store.session() as db:
            users, edges = self.users(db), self.edges(db)
            first = await _find_or_404(
                users, email_a, Operation.GET_COMMON_FRIENDS,
            )
            second = await _find_or_404(
                users, email_b, Operation.GET_COMMON_FRIENDS,
            )
            common = intersect_friends(
                await edges.friend_emails(first.id),
                await edges.friend_emails(second.id),
            )
        logger.info(
            "Common friends resolved",
            extra={"email": first.email, "target": second.email, "count": len(common)},
        )
        return FriendList(friends=common)

    async def get_notification_recipients(
        self, sender: str, text: str | None,
    ) -> list[str]:
        """Everyone eligible to receive an update posted by sender."""
        async with self.store.transaction() as db:
            edges = self.edges(db)
            user = await self.users(db).resolve(sender)
            recipients = merge_recipients(
                friends=await edges.friend_emails(user.id),
                subscribers=await edges.subscriber_emails(user.id),
                mentions=extract_mentions(text),
                blockers=await edges.blocker_emails(user.id),
            )
        logger.info(
            "Notification recipients resolved",
            extra={"email": user.email, "count": len(recipients)},
        )
        return recipients


async def _find_or_404(
    users: UserDirectory, email: str, operation: Operation,
) -> UserRef:
    user = await users.find(email)
    if user is None:
        normalized = normalize_email(email)
        raise ResourceNotFoundError(
            "User", normalized,
            ErrorContext(operation=operation.value, emails=[normalized]),
        )
    return user
