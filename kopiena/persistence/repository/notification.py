"""PostgreSQL implementation of Notification repository."""

from sqlalchemy import insert, select

from kopiena.domain.model import Notification
from kopiena.domain.repository import NotificationRepository
from kopiena.domain.value import UserId
from kopiena.persistence.mappers import notification_to_dict, row_to_notification
from kopiena.persistence.repository.base import PostgresRepository
from kopiena.persistence.tables import notifications_table


class PostgresNotificationRepository(PostgresRepository, NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification."""
        stmt = insert(notifications_table).values(**notification_to_dict(notification))
        await self._execute(stmt, flush=True)
        return notification

    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first."""
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.user_id == user_id)
            .order_by(notifications_table.c.created_at.desc())
        )
        result = await self._execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]
