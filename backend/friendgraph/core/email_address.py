"""Email Address Rules — normalization, format check and mention scanning.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - normalize_email is the only place that defines "the same user"
    - extract_mentions returns normalized emails in order of first appearance, no duplicates

Design Decisions:
    - One pattern shared by the format check (anchored) and the mention scan (unanchored)
      so an address accepted in a request is also recognized inside free text
"""

import re

from friendgraph.core.domain_types import Email

MAX_EMAIL_LENGTH = 100

_LOCAL_PART = r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
_DOMAIN_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
EMAIL_PATTERN = rf"{_LOCAL_PART}@{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL})*"

_EMAIL_FULL_RE = re.compile(rf"^{EMAIL_PATTERN}$")
_EMAIL_SCAN_RE = re.compile(EMAIL_PATTERN)


def normalize_email(email: str) -> Email:
    """Trim surrounding whitespace and lowercase."""
    return Email(email.strip().lower())


def is_valid_email(email: str) -> bool:
    """Format check applied to raw request input (after trimming)."""
    candidate = email.strip()
    if not candidate or len(candidate) > MAX_EMAIL_LENGTH:
        return False
    return _EMAIL_FULL_RE.match(candidate) is not None


def extract_mentions(text: str | None) -> list[Email]:
    """Find every email-shaped substring in free text."""
    if not text:
        return []
    seen: set[str] = set()
    mentions: list[Email] = []
    for match in _EMAIL_SCAN_RE.findall(text):
        email = normalize_email(match)
        if email in seen:
            continue
        seen.add(email)
        mentions.append(email)
    return mentions
