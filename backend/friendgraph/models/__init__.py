"""ORM Models — SQLAlchemy declarative models for users and relationship edges.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the only entity; every edge table references two users

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from friendgraph.models.user import User  # noqa: F401
from friendgraph.models.friend_edge import FriendEdge  # noqa: F401
from friendgraph.models.block_edge import BlockEdge  # noqa: F401
from friendgraph.models.subscription_edge import SubscriptionEdge  # noqa: F401
