"""FriendEdge ORM — one directed row per side of a mutual friendship.

Invariants:
    - A friendship is always two rows (A->B and B->A) written in one transaction
    - (user_id, friend_id) is unique
    - Integer id defines storage order for friend lists

Design Decisions:
    - Two directed rows over one undirected row: "friends of X" is a single
      indexed lookup on user_id (ADR: symmetric edges as two rows)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from friendgraph.db.base import Base


class FriendEdge(Base):
    """Directed half of a mutual friendship."""
    __tablename__ = "friends"
    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friends_pair"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    friend_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
