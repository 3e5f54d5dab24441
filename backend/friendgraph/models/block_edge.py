"""BlockEdge ORM — user_id has blocked target_id.

Invariants:
    - Directed: no reciprocal row is implied
    - (user_id, target_id) is unique
    - Never deletes an existing FriendEdge by itself
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from friendgraph.db.base import Base


class BlockEdge(Base):
    """Directed block: blocker -> blocked."""
    __tablename__ = "blocks"
    __table_args__ = (
        UniqueConstraint("user_id", "target_id", name="uq_blocks_pair"),
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
