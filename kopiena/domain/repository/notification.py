"""Notification repository interface."""

from abc import ABC, abstractmethod

from kopiena.domain.model.notification import Notification
from kopiena.domain.value import UserId


class NotificationRepository(ABC):
    """Repository interface for notifications."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Insert a notification.

        Args:
            notification: Notification to save

        Returns:
            Saved notification
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first.

        Args:
            user_id: Recipient's identifier

        Returns:
            List of notifications
        """
        pass
