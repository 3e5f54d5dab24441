"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID — never use bare UUID in domain logic
    - Email is always the normalized form (trimmed, lowercased)
    - Engine operations encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
Email = NewType("Email", str)


@dataclass(frozen=True)
class UserRef:
    """Resolved user identity: stable identifier plus normalized email."""
    id: UserId
    email: Email


@dataclass
class FriendList:
    """Friend emails in storage order plus their count."""
    friends: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.friends)


# ─── Enums ───────────────────────────────────────────────────────

class Operation(str, Enum):
    """Engine operations — used for logging, errors and self-reference messages."""
    CONNECT = "connect"
    SUBSCRIBE = "subscribe"
    BLOCK = "block"
    GET_FRIENDS = "get_friends"
    GET_COMMON_FRIENDS = "get_common_friends"
    GET_RECIPIENTS = "get_notification_recipients"
