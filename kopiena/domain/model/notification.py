"""Notification entity."""

from datetime import datetime

from pydantic import Field

from kopiena.domain.model.common import DomainModel
from kopiena.domain.value import NotificationId, NotificationType, UserId


class Notification(DomainModel):
    """In-app notification addressed to a single user."""

    id: NotificationId
    user_id: UserId
    type: NotificationType
    title: str
    message: str | None = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
