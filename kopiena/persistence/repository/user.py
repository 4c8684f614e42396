"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import case, select

from kopiena.domain.model import User
from kopiena.domain.repository import UserRepository
from kopiena.domain.value import UserId
from kopiena.persistence.mappers import row_to_user, user_to_dict
from kopiena.persistence.repository.base import PostgresRepository
from kopiena.persistence.tables import users_table


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            # The pending count is only ever changed by the atomic helpers below
            user_dict.pop("pending_suggestion_count")
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)
        await self._execute(stmt, flush=True)
        return user

    async def increment_pending_suggestions(self, user_id: UserId, maximum: int) -> bool:
        """Atomically increment the pending count while it is below ``maximum``.

        Args:
            user_id: User ID to update
            maximum: Cap on the pending count

        Returns:
            True if a row was updated
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .where(users_table.c.pending_suggestion_count < maximum)
            .values(
                pending_suggestion_count=users_table.c.pending_suggestion_count + 1
            )
        )
        result = await self._execute(stmt, flush=True)
        return result.rowcount == 1

    async def decrement_pending_suggestions(self, user_id: UserId) -> None:
        """Atomically decrement the pending count by 1 (minimum 0).

        Args:
            user_id: User ID to update
        """
        count = users_table.c.pending_suggestion_count
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(pending_suggestion_count=case((count > 0, count - 1), else_=0))
        )
        await self._execute(stmt, flush=True)

    async def set_pending_suggestions(self, user_id: UserId, count: int) -> None:
        """Overwrite the pending count.

        Args:
            user_id: User ID to update
            count: New count
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(pending_suggestion_count=count)
        )
        await self._execute(stmt, flush=True)
