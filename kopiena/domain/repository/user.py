"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from kopiena.domain.model.user import User
from kopiena.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def increment_pending_suggestions(self, user_id: UserId, maximum: int) -> bool:
        """Atomically increment the pending suggestion count if below ``maximum``.

        Args:
            user_id: The user's unique identifier
            maximum: Count the user may not exceed

        Returns:
            True if the count was incremented, False if it was already at the cap
        """
        pass

    @abstractmethod
    async def decrement_pending_suggestions(self, user_id: UserId) -> None:
        """Atomically decrement the pending suggestion count by 1 (minimum 0).

        Args:
            user_id: The user's unique identifier
        """
        pass

    @abstractmethod
    async def set_pending_suggestions(self, user_id: UserId, count: int) -> None:
        """Overwrite the pending suggestion count.

        Args:
            user_id: The user's unique identifier
            count: New count
        """
        pass
