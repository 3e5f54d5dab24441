"""User ORM — one row per normalized email address.

Invariants:
    - id is UUID primary key (generated client-side)
    - email is stored normalized (trimmed, lowercased) and is unique
    - Users are never deleted by the engines

Design Decisions:
    - varchar(100) email: request validation enforces the same limit, so the
      column never truncates or rejects a validated address
    - No ORM relationships to edges: edge queries are explicit selects in
      services/edge_store.py (ADR: no lazy loading under async)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from friendgraph.db.base import Base


class User(Base):
    """User identity keyed by normalized email."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
