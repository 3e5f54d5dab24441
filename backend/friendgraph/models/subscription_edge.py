"""SubscriptionEdge ORM — user_id wants updates from target_id.

Invariants:
    - Directed: subscriber (user_id) -> target (target_id)
    - (user_id, target_id) is unique
    - Independent of friendship: either may exist without the other

Design Decisions:
    - target_id indexed: recipient resolution reads "all X subscribed to S"
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from friendgraph.db.base import Base


class SubscriptionEdge(Base):
    """Directed subscription: subscriber -> target."""
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", "target_id", name="uq_subscriptions_pair"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    target_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
