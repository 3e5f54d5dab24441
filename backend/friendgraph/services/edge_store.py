"""Edge Store — existence checks, writes and list reads for relationship edges.

Invariants:
    - Operates only inside the session it was given; never commits or rolls back
    - add_friendship writes both directions in one statement or neither
    - add_* / remove_* report whether state actually changed; an edge written by a
      concurrent transaction counts as "already there", never as an error
    - List reads are ordered by edge id (storage order)

Design Decisions:
    - Explicit selects over ORM association collections: no lazy loads under async
    - Subscribers of S are rows (X -> S); blockers of S are rows (X -> S)
    - Inserts use ON CONFLICT DO NOTHING on the pair constraint instead of
      check-then-insert, so two racing Connect calls both succeed
"""

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from friendgraph.core.domain_types import Email, UserId
from friendgraph.models.block_edge import BlockEdge
from friendgraph.models.friend_edge import FriendEdge
from friendgraph.models.subscription_edge import SubscriptionEdge
from friendgraph.models.user import User


class EdgeStore:
    """Friend, block and subscription edges within one unit of work."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Friend edges ────────────────────────────────────────────

    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool:
        """Friendship is symmetric, so one direction is enough."""
        return await self._exists(
            select(FriendEdge.id)
            .where(FriendEdge.user_id == user_id)
            .where(FriendEdge.friend_id == other_id)
        )

    async def add_friendship(self, user_id: UserId, other_id: UserId) -> bool:
        """Write both directed rows; False when the pair were already friends."""
        return await self._insert_missing(
            FriendEdge, ("user_id", "friend_id"),
            [
                {"user_id": user_id, "friend_id": other_id},
                {"user_id": other_id, "friend_id": user_id},
            ],
        )

    async def friend_emails(self, user_id: UserId) -> list[Email]:
        result = await self.db.execute(
            select(User.email)
            .join(FriendEdge, FriendEdge.friend_id == User.id)
            .where(FriendEdge.user_id == user_id)
            .order_by(FriendEdge.id)
        )
        return [Email(email) for email in result.scalars().all()]

    # ─── Block edges ─────────────────────────────────────────────

    async def has_block(self, blocker_id: UserId, target_id: UserId) -> bool:
        return await self._exists(
            select(BlockEdge.id)
            .where(BlockEdge.user_id == blocker_id)
            .where(BlockEdge.target_id == target_id)
        )

    async def add_block(self, blocker_id: UserId, target_id: UserId) -> bool:
        return await self._insert_missing(
            BlockEdge, ("user_id", "target_id"),
            [{"user_id": blocker_id, "target_id": target_id}],
        )

    async def blocker_emails(self, user_id: UserId) -> list[Email]:
        """Emails of every user holding a block against user_id."""
        result = await self.db.execute(
            select(User.email)
            .join(BlockEdge, BlockEdge.user_id == User.id)
            .where(BlockEdge.target_id == user_id)
            .order_by(BlockEdge.id)
        )
        return [Email(email) for email in result.scalars().all()]

    # ─── Subscription edges ──────────────────────────────────────

    async def has_subscription(
        self, subscriber_id: UserId, target_id: UserId,
    ) -> bool:
        return await self._exists(
            select(SubscriptionEdge.id)
            .where(SubscriptionEdge.user_id == subscriber_id)
            .where(SubscriptionEdge.target_id == target_id)
        )

    async def add_subscription(
        self, subscriber_id: UserId, target_id: UserId,
    ) -> bool:
        return await self._insert_missing(
            SubscriptionEdge, ("user_id", "target_id"),
            [{"user_id": subscriber_id, "target_id": target_id}],
        )

    async def remove_subscription(
        self, subscriber_id: UserId, target_id: UserId,
    ) -> bool:
        result = await self.db.execute(
            delete(SubscriptionEdge)
            .where(SubscriptionEdge.user_id == subscriber_id)
            .where(SubscriptionEdge.target_id == target_id)
        )
        return result.rowcount > 0

    async def subscriber_emails(self, user_id: UserId) -> list[Email]:
        """Emails of every user subscribed to user_id."""
        result = await self.db.execute(
            select(User.email)
            .join(SubscriptionEdge, SubscriptionEdge.user_id == User.id)
            .where(SubscriptionEdge.target_id == user_id)
            .order_by(SubscriptionEdge.id)
        )
        return [Email(email) for email in result.scalars().all()]

    async def _exists(self, query) -> bool:
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def _insert_missing(
        self, model, pair: tuple[str, str], rows: list[dict],
    ) -> bool:
        """Insert rows, skipping any whose pair already exists; True if any landed."""
        dialect = self.db.get_bind().dialect.name
        insert = sqlite_insert if dialect == "sqlite" else pg_insert
        stmt = (
            insert(model)
            .values(rows)
            .on_conflict_do_nothing(index_elements=list(pair))
            .returning(model.id)
        )
        result = await self.db.execute(stmt)
        return len(result.all()) > 0
