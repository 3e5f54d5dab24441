"""Relationship Rules — pure checks and list derivations used by both engines.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_distinct raises InvalidRequestError when both sides normalize to the same email
    - intersect_friends is an exact set intersection, independent of input order,
      preserving the order of the first list
    - merge_recipients dedups by first occurrence (friends, then subscribers, then mentions)
      and drops every blocker

Design Decisions:
    - Hash-based intersection: O(n+m) and correct for any ordering of the two lists
    - Raise typed errors (not dicts): engines run inside a transaction context and an
      exception is what triggers rollback
"""

from collections.abc import Iterable

from friendgraph.core.domain_types import Operation
from friendgraph.core.email_address import normalize_email
from friendgraph.core.errors import ErrorContext, InvalidRequestError

_SELF_REFERENCE_MESSAGES = {
    Operation.CONNECT: ("self-connection", "Could not connect same email"),
    Operation.SUBSCRIBE: ("self-subscription", "Could not subscribe to self"),
    Operation.BLOCK: ("self-block", "Could not block self"),
    Operation.GET_COMMON_FRIENDS: (
        "self-commons",
        "Could not get common friend list from same email address",
    ),
}


def check_distinct(first: str, second: str, operation: Operation) -> None:
    """Reject requests whose two emails refer to the same user."""
    if normalize_email(first) != normalize_email(second):
        return
    reason, message = _SELF_REFERENCE_MESSAGES[operation]
    raise InvalidRequestError(
        message, reason,
        ErrorContext(operation=operation.value, emails=[normalize_email(first)]),
    )


def intersect_friends(first: list[str], second: list[str]) -> list[str]:
    """Emails present in both lists, in the order they appear in `first`."""
    lookup = set(second)
    seen: set[str] = set()
    result = []
    for email in first:
        if email in lookup and email not in seen:
            seen.add(email)
            result.append(email)
    return result


def merge_recipients(
    friends: Iterable[str],
    subscribers: Iterable[str],
    mentions: Iterable[str],
    blockers: Iterable[str],
) -> list[str]:
    """Union of the three sources minus anyone blocking the sender."""
    excluded = set(blockers)
    seen: set[str] = set()
    recipients = []
    for source in (friends, subscribers, mentions):
        for email in source:
            if email in seen:
                continue
            seen.add(email)
            if email not in excluded:
                recipients.append(email)
    return recipients
