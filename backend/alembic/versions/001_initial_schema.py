"""Initial schema — users, friends, blocks, subscriptions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (table, column naming the other user, unique constraint, indexed column)
_EDGE_TABLES = [
    ("friends", "friend_id", "uq_friends_pair", "user_id"),
    ("blocks", "target_id", "uq_blocks_pair", "target_id"),
    ("subscriptions", "target_id", "uq_subscriptions_pair", "target_id"),
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    for table, other_column, unique_name, indexed in _EDGE_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column(other_column, UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint("user_id", other_column, name=unique_name),
        )
        op.create_index(f"ix_{table}_{indexed}", table, [indexed])


def downgrade() -> None:
    for table, _, _, indexed in reversed(_EDGE_TABLES):
        op.drop_index(f"ix_{table}_{indexed}", table_name=table)
        op.drop_table(table)
    op.drop_table("users")
