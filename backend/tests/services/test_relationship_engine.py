"""Relationship Engine — connect, subscribe and block rules.

Tests cover:
    - connect writes a symmetric pair, is idempotent (even against a concurrent
      writer), rejects self and blocked pairs
    - a failed connect leaves no partial writes (users included)
    - subscribe fails only for friends blocked by the target
    - block is idempotent, keeps the friendship, drops target -> requester subscription
"""

import pytest

from friendgraph.core.errors import ConflictError, InvalidRequestError
from friendgraph.models.block_edge import BlockEdge
from friendgraph.models.friend_edge import FriendEdge
from friendgraph.models.subscription_edge import SubscriptionEdge
from friendgraph.models.user import User
from friendgraph.services.edge_store import EdgeStore
from friendgraph.services.identity_resolver import IdentityResolver


# ─── connect ─────────────────────────────────────────────────────

async def test_connect_creates_both_directions(relationships, queries, count_rows):
    await relationships.connect("andy@example.com", "john@example.com")

    assert (await queries.get_friends("andy@example.com")).friends == ["john@example.com"]
    assert (await queries.get_friends("john@example.com")).friends == ["andy@example.com"]
    assert await count_rows(FriendEdge) == 2
    assert await count_rows(User) == 2


async def test_connect_is_idempotent(relationships, count_rows):
    await relationships.connect("andy@example.com", "john@example.com")
    await relationships.connect("andy@example.com", "john@example.com")
    await relationships.connect("JOHN@example.com", "andy@example.com")

    assert await count_rows(FriendEdge) == 2
    assert await count_rows(User) == 2


async def test_connect_self_rejected_without_writes(relationships, count_rows):
    with pytest.raises(InvalidRequestError) as exc_info:
        await relationships.connect("a@x.com", " A@x.com")

    assert exc_info.value.reason == "self-connection"
    assert await count_rows(User) == 0


async def test_connect_rejected_when_blocked_either_way(relationships, count_rows):
    await relationships.block("a@x.com", "b@x.com")

    with pytest.raises(ConflictError) as exc_info:
        await relationships.connect("a@x.com", "b@x.com")
    assert exc_info.value.reason == "blocked"

    with pytest.raises(ConflictError):
        await relationships.connect("b@x.com", "a@x.com")

    assert await count_rows(FriendEdge) == 0


async def test_rejected_connect_leaves_users_unchanged(relationships, count_rows):
    await relationships.block("a@x.com", "b@x.com")

    with pytest.raises(ConflictError):
        await relationships.connect("b@x.com", "a@x.com")

    assert await count_rows(User) == 2


async def test_block_after_friendship_keeps_connect_a_noop(relationships, count_rows):
    await relationships.connect("a@x.com", "b@x.com")
    await relationships.block("b@x.com", "a@x.com")

    await relationships.connect("a@x.com", "b@x.com")

    assert await count_rows(FriendEdge) == 2


async def test_connect_failure_midway_leaves_no_partial_edges(
    relationships, count_rows, monkeypatch,
):
    async def half_then_fail(self, user_id, other_id):
        self.db.add(FriendEdge(user_id=user_id, friend_id=other_id))
        await self.db.flush()
        raise RuntimeError("connection lost")

    monkeypatch.setattr(EdgeStore, "add_friendship", half_then_fail)

    with pytest.raises(RuntimeError):
        await relationships.connect("a@x.com", "b@x.com")

    assert await count_rows(FriendEdge) == 0
    assert await count_rows(User) == 0


async def test_connect_racing_an_existing_friendship_succeeds(
    relationships, count_rows, monkeypatch,
):
    await relationships.connect("a@x.com", "b@x.com")

    # friendship committed by another transaction after this one's check
    async def stale_check(self, user_id, other_id):
        return False

    monkeypatch.setattr(EdgeStore, "are_friends", stale_check)

    await relationships.connect("b@x.com", "a@x.com")

    assert await count_rows(FriendEdge) == 2


# ─── subscribe ───────────────────────────────────────────────────

async def test_subscribe_creates_directed_edge(relationships, count_rows):
    await relationships.subscribe("lisa@example.com", "john@example.com")
    await relationships.subscribe("lisa@example.com", "john@example.com")

    assert await count_rows(SubscriptionEdge) == 1
    assert await count_rows(User) == 2


async def test_subscribe_self_rejected(relationships):
    with pytest.raises(InvalidRequestError) as exc_info:
        await relationships.subscribe("lisa@example.com", "LISA@example.com")
    assert exc_info.value.reason == "self-subscription"


async def test_subscribe_rejected_for_friend_blocked_by_target(relationships, count_rows):
    await relationships.connect("a@x.com", "b@x.com")
    await relationships.block("b@x.com", "a@x.com")

    with pytest.raises(ConflictError) as exc_info:
        await relationships.subscribe("a@x.com", "b@x.com")

    assert exc_info.value.reason == "blocked by target"
    assert await count_rows(SubscriptionEdge) == 0


async def test_subscribe_allowed_when_blocked_but_not_friends(relationships, count_rows):
    await relationships.block("b@x.com", "a@x.com")

    await relationships.subscribe("a@x.com", "b@x.com")

    assert await count_rows(SubscriptionEdge) == 1


async def test_subscribe_allowed_when_requester_is_the_blocker(relationships, count_rows):
    await relationships.connect("a@x.com", "b@x.com")
    await relationships.block("a@x.com", "b@x.com")

    await relationships.subscribe("a@x.com", "b@x.com")

    assert await count_rows(SubscriptionEdge) == 1


# ─── block ───────────────────────────────────────────────────────

async def test_block_is_idempotent(relationships, count_rows):
    await relationships.block("a@x.com", "b@x.com")
    await relationships.block("A@x.com", "b@x.com")

    assert await count_rows(BlockEdge) == 1


async def test_block_self_rejected(relationships, count_rows):
    with pytest.raises(InvalidRequestError) as exc_info:
        await relationships.block("a@x.com", "a@x.com")
    assert exc_info.value.reason == "self-block"
    assert await count_rows(BlockEdge) == 0


async def test_block_between_friends_drops_only_target_subscription(
    relationships, queries, store,
):
    await relationships.connect("a@x.com", "b@x.com")
    await relationships.subscribe("b@x.com", "a@x.com")
    await relationships.subscribe("a@x.com", "b@x.com")

    await relationships.block("a@x.com", "b@x.com")

    async with store.session() as db:
        users, edges = IdentityResolver(db), EdgeStore(db)
        a = await users.find("a@x.com")
        b = await users.find("b@x.com")
        assert not await edges.has_subscription(b.id, a.id)
        assert await edges.has_subscription(a.id, b.id)
        assert await edges.are_friends(a.id, b.id)

    assert (await queries.get_friends("a@x.com")).friends == ["b@x.com"]


async def test_block_between_non_friends_keeps_subscriptions(relationships, count_rows):
    await relationships.subscribe("b@x.com", "a@x.com")

    await relationships.block("a@x.com", "b@x.com")

    assert await count_rows(SubscriptionEdge) == 1
    assert await count_rows(BlockEdge) == 1
