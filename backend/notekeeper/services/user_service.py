"""
Notekeeper Backend — User Directory Service
=============================================

What:  Read-only access to users for the notes handlers.
How:   Resolves owner ids to usernames in one batched query and checks that a
       referenced user exists before a note is written.
Who:   Called by NoteService.
"""

import logging
from typing import Dict, Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import DependencyError, ValidationError
from notekeeper.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Stateless lookups against the users table."""

    async def resolve_usernames(
        self, db: AsyncSession, user_ids: Iterable[UUID]
    ) -> Dict[UUID, str]:
        """
        Map every id in `user_ids` to its username.

        All ids are looked up in a single `IN` query. The result is all or
        nothing: if the query fails, or any id has no matching user, a
        DependencyError is raised and no partial mapping is returned.
        """
        wanted = set(user_ids)
        if not wanted:
            return {}

        try:
            result = await db.execute(
                select(User.id, User.username).where(User.id.in_(list(wanted)))
            )
            usernames = {row.id: row.username for row in result.all()}
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", str(e), exc_info=True)
            raise DependencyError(
                context={"operation": "resolve_usernames", "error_type": type(e).__name__},
            ) from e

        missing = wanted - usernames.keys()
        if missing:
            logger.error("Notes reference unknown users: %s", sorted(str(m) for m in missing))
            raise DependencyError(
                context={"missing_user_ids": sorted(str(m) for m in missing)},
            )
        return usernames

    async def ensure_user_exists(self, db: AsyncSession, user_id: UUID) -> None:
        """Raise ValidationError(field="user") when no user has `user_id`."""
        try:
            found = await db.scalar(select(User.id).where(User.id == user_id))
        except SQLAlchemyError as e:
            logger.error("User existence check failed for %s: %s", user_id, str(e))
            raise DependencyError(
                context={"operation": "ensure_user_exists", "error_type": type(e).__name__},
            ) from e

        if found is None:
            raise ValidationError(
                message=f"User with ID '{user_id}' does not exist",
                field="user",
            )


user_service = UserService()
