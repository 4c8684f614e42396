"""In-memory notification repository for testing."""

from kopiena.domain.model import Notification
from kopiena.domain.repository import NotificationRepository
from kopiena.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification."""
        self.database.notifications[notification.id] = notification
        return notification

    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first."""
        return sorted(
            (n for n in self.database.notifications.values() if n.user_id == user_id),
            key=lambda n: n.created_at,
            reverse=True,
        )
