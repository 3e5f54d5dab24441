"""Relationship Rules — self-reference checks, intersection and recipient merge.

Tests cover:
    - check_distinct raises InvalidRequestError with operation-specific reason
    - intersect_friends is an exact set intersection for any ordering
    - merge_recipients precedence, dedup and blocker exclusion
"""

import itertools
import random

import pytest

from friendgraph.core.domain_types import Operation
from friendgraph.core.errors import InvalidRequestError
from friendgraph.core.relationship_rules import (
    check_distinct, intersect_friends, merge_recipients,
)


# ─── check_distinct ──────────────────────────────────────────────

def test_distinct_emails_pass():
    check_distinct("a@x.com", "b@x.com", Operation.CONNECT)


@pytest.mark.parametrize("operation, reason", [
    (Operation.CONNECT, "self-connection"),
    (Operation.SUBSCRIBE, "self-subscription"),
    (Operation.BLOCK, "self-block"),
    (Operation.GET_COMMON_FRIENDS, "self-commons"),
])
def test_same_email_rejected(operation, reason):
    with pytest.raises(InvalidRequestError) as exc_info:
        check_distinct("a@x.com", "a@x.com", operation)
    assert exc_info.value.reason == reason
    assert exc_info.value.http_status == 400
    assert exc_info.value.context.operation == operation.value


def test_same_email_after_normalization_rejected():
    with pytest.raises(InvalidRequestError):
        check_distinct(" A@X.com", "a@x.COM ", Operation.CONNECT)


# ─── intersect_friends ───────────────────────────────────────────

def test_intersection_of_disjoint_lists_is_empty():
    assert intersect_friends(["a@x.com"], ["b@x.com"]) == []


def test_intersection_with_empty_list():
    assert intersect_friends([], ["a@x.com"]) == []
    assert intersect_friends(["a@x.com"], []) == []


def test_intersection_preserves_first_list_order():
    first = ["c@x.com", "a@x.com", "b@x.com"]
    second = ["a@x.com", "b@x.com", "c@x.com"]
    assert intersect_friends(first, second) == first


def test_intersection_does_not_stop_at_first_mismatch():
    # Positional scans stop once neighbours diverge; a set must not
    first = ["a@x.com", "b@x.com", "z@x.com", "c@x.com"]
    second = ["a@x.com", "y@x.com", "c@x.com", "b@x.com"]
    assert intersect_friends(first, second) == [
        "a@x.com", "b@x.com", "c@x.com",
    ]


def test_intersection_independent_of_ordering():
    first = [f"u{i}@x.com" for i in range(8)]
    second = [f"u{i}@x.com" for i in range(4, 12)]
    expected = set(first) & set(second)
    rng = random.Random(7)
    for _ in range(25):
        a, b = first[:], second[:]
        rng.shuffle(a)
        rng.shuffle(b)
        assert set(intersect_friends(a, b)) == expected
        assert len(intersect_friends(a, b)) == len(expected)


def test_intersection_all_permutations_of_small_lists():
    base = ["a@x.com", "b@x.com", "c@x.com"]
    other = ["c@x.com", "a@x.com", "d@x.com"]
    for perm in itertools.permutations(base):
        assert set(intersect_friends(list(perm), other)) == {"a@x.com", "c@x.com"}


# ─── merge_recipients ────────────────────────────────────────────

def test_recipient_precedence_and_dedup():
    recipients = merge_recipients(
        friends=["f1@x.com", "f2@x.com"],
        subscribers=["f2@x.com", "s1@x.com"],
        mentions=["f1@x.com", "s2@x.com"],
        blockers=[],
    )
    assert recipients == ["f1@x.com", "f2@x.com", "s1@x.com", "s2@x.com"]


def test_blockers_removed_from_every_source():
    recipients = merge_recipients(
        friends=["f1@x.com", "x@x.com"],
        subscribers=["x@x.com", "s1@x.com"],
        mentions=["x@x.com", "m@x.com"],
        blockers=["x@x.com"],
    )
    assert recipients == ["f1@x.com", "s1@x.com", "m@x.com"]


def test_blocker_not_in_any_source_is_ignored():
    assert merge_recipients(["a@x.com"], [], [], ["z@x.com"]) == ["a@x.com"]


def test_all_sources_empty():
    assert merge_recipients([], [], [], []) == []
