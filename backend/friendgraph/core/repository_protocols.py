"""Boundary Protocols — contracts between the engines and the store.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - TransactionalStore hands out one session per call; engines never share sessions
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from friendgraph.core.domain_types import Email, UserId, UserRef


class TransactionalStore(Protocol):
    """Unit-of-work provider — implemented by DatabaseSessionManager."""
    def session(self) -> AbstractAsyncContextManager: ...
    def transaction(self) -> AbstractAsyncContextManager: ...


class UserDirectory(Protocol):
    """Contract for user identity lookup — implemented by IdentityResolver."""
    async def resolve(self, email: str) -> UserRef: ...
    async def find(self, email: str) -> UserRef | None: ...


class EdgeRepository(Protocol):
    """Contract for relationship edge persistence — implemented by EdgeStore."""
    async def are_friends(self, user_id: UserId, other_id: UserId) -> bool: ...
    async def add_friendship(self, user_id: UserId, other_id: UserId) -> bool: ...
    async def has_block(self, blocker_id: UserId, target_id: UserId) -> bool: ...
    async def add_block(self, blocker_id: UserId, target_id: UserId) -> bool: ...
    async def has_subscription(self, subscriber_id: UserId, target_id: UserId) -> bool: ...
    async def add_subscription(self, subscriber_id: UserId, target_id: UserId) -> bool: ...
    async def remove_subscription(self, subscriber_id: UserId, target_id: UserId) -> bool: ...
    async def friend_emails(self, user_id: UserId) -> list[Email]: ...
    async def subscriber_emails(self, user_id: UserId) -> list[Email]: ...
    async def blocker_emails(self, user_id: UserId) -> list[Email]: ...
