"""In-memory user repository for testing."""

from typing import Optional

from kopiena.domain.model.user import User
from kopiena.domain.repository.user import UserRepository
from kopiena.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.users.get(user_id)

    async def save(self, user: User) -> User:
        """Save or update a user, keeping a stored pending count."""
        existing = self.database.users.get(user.id)
        if existing:
            user = user.model_copy(
                update={"pending_suggestion_count": existing.pending_suggestion_count}
            )
        self.database.users[user.id] = user
        return user

    async def increment_pending_suggestions(self, user_id: UserId, maximum: int) -> bool:
        """Increment the pending count while it is below ``maximum``."""
        user = self.database.users.get(user_id)
        if not user or user.pending_suggestion_count >= maximum:
            return False
        self.database.users[user_id] = user.model_copy(
            update={"pending_suggestion_count": user.pending_suggestion_count + 1}
        )
        return True

    async def decrement_pending_suggestions(self, user_id: UserId) -> None:
        """Decrement the pending count by 1 (minimum 0)."""
        user = self.database.users.get(user_id)
        if user:
            self.database.users[user_id] = user.model_copy(
                update={
                    "pending_suggestion_count": max(0, user.pending_suggestion_count - 1)
                }
            )

    async def set_pending_suggestions(self, user_id: UserId, count: int) -> None:
        """Overwrite the pending count."""
        user = self.database.users.get(user_id)
        if user:
            self.database.users[user_id] = user.model_copy(
                update={"pending_suggestion_count": count}
            )
