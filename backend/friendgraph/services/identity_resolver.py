"""Identity Resolver — maps an email to its User row, creating it on first reference.

Invariants:
    - Email is normalized (trim, lowercase) before every lookup or insert
    - resolve() creates inside the caller's transaction; flush makes the row
      visible to a second resolve() of the same email in that transaction
    - find() never writes
    - A failed insert (e.g. unique violation from a concurrent creator) surfaces
      as DatabaseError; the caller's transaction then rolls back

Design Decisions:
    - Bound to one AsyncSession: the resolver lives exactly as long as the unit of work
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from friendgraph.core.domain_types import Email, UserId, UserRef
from friendgraph.core.email_address import normalize_email
from friendgraph.core.errors import DatabaseError, ErrorContext
from friendgraph.models.user import User

logger = logging.getLogger(__name__)


class IdentityResolver:
    """User directory backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, email: str) -> UserRef | None:
        """Exact lookup by normalized email; None if unknown."""
        normalized = normalize_email(email)
        result = await self.db.execute(
            select(User).where(User.email == normalized),
        )
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return UserRef(id=UserId(user.id), email=Email(user.email))

    async def resolve(self, email: str) -> UserRef:
        """Lookup by normalized email, creating the user if absent."""
        existing = await self.find(email)
        if existing is not None:
            return existing

        normalized = normalize_email(email)
        user = User(email=normalized)
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.error(
                f"Failed to create user: {e}", extra={"email": normalized},
            )
            raise DatabaseError(
                "Failed to create new user", "create_user",
                ErrorContext(operation="create_user", emails=[normalized]),
            )
        logger.info("User created", extra={"email": normalized})
        return UserRef(id=UserId(user.id), email=Email(user.email))
