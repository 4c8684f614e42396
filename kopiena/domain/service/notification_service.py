"""Notification domain service."""

from uuid import uuid4

import logfire

from kopiena.domain.model import Notification, TagSuggestion
from kopiena.domain.repository import NotificationRepository, UnitOfWork
from kopiena.domain.value import (
    NotificationId,
    NotificationType,
    SuggestionStatus,
    UserId,
)

from .base import Service

_SUGGESTION_TITLES = {
    SuggestionStatus.APPROVED: "Tag Suggestion Approved",
    SuggestionStatus.DENIED: "Tag Suggestion Denied",
    SuggestionStatus.MERGED: "Tag Suggestion Merged",
}

_SUGGESTION_TYPES = {
    SuggestionStatus.APPROVED: NotificationType.TAG_SUGGESTION_APPROVED,
    SuggestionStatus.DENIED: NotificationType.TAG_SUGGESTION_DENIED,
    SuggestionStatus.MERGED: NotificationType.TAG_SUGGESTION_MERGED,
}


class NotificationService(Service):
    """Emits in-app notifications.

    Emission is best-effort: a failure is logged and reported as ``None``
    but never raised, so it cannot undo the change being announced.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            unit_of_work: Atomic unit, isolates a failed write from the request
        """
        self.notification_repository = notification_repository
        self.unit_of_work = unit_of_work

    async def notify(
        self,
        user_id: UserId,
        type: NotificationType,
        title: str,
        message: str | None = None,
    ) -> Notification | None:
        """Create a notification for a user.

        Args:
            user_id: Recipient
            type: Notification type
            title: Short title
            message: Body text

        Returns:
            The stored notification, or None if it could not be stored
        """
        with logfire.span(
            "notification_service.notify", user_id=str(user_id), type=type.value
        ):
            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=user_id,
                type=type,
                title=title,
                message=message,
            )
            try:
                async with self.unit_of_work.atomic():
                    saved = await self.notification_repository.save(notification)
            except Exception as e:
                logfire.error(
                    "Failed to emit notification",
                    user_id=str(user_id),
                    type=type.value,
                    error=str(e),
                )
                return None

            logfire.info(
                "Notification emitted",
                notification_id=str(saved.id),
                user_id=str(user_id),
                type=type.value,
            )
            return saved

    async def notify_suggestion_resolved(
        self, suggestion: TagSuggestion, merged_into_name: str | None = None
    ) -> Notification | None:
        """Tell a submitter how their suggestion was resolved.

        Args:
            suggestion: Resolved suggestion
            merged_into_name: Name of the tag a merged suggestion points at

        Returns:
            The stored notification, or None if it could not be stored
        """
        if suggestion.status == SuggestionStatus.APPROVED:
            message = (
                f'Your suggestion "{suggestion.name_en}" has been approved '
                "and added to the taxonomy!"
            )
        elif suggestion.status == SuggestionStatus.DENIED:
            message = f'Your suggestion "{suggestion.name_en}" was not approved.'
            if suggestion.moderator_notes:
                message += f" Reason: {suggestion.moderator_notes}"
        elif suggestion.status == SuggestionStatus.MERGED:
            message = (
                f'Your suggestion "{suggestion.name_en}" was merged with '
                f'existing tag "{merged_into_name}".'
            )
        else:
            raise ValueError(f"Suggestion is not resolved: {suggestion.id}")

        return await self.notify(
            user_id=suggestion.suggested_by_id,
            type=_SUGGESTION_TYPES[suggestion.status],
            title=_SUGGESTION_TITLES[suggestion.status],
            message=message,
        )

