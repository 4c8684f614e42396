"""Domain value objects for Kopiena."""

from kopiena.domain.value.identifiers import (
    NotificationId,
    TagId,
    TagParentId,
    TagSuggestionId,
    UserId,
)
from kopiena.domain.value.types import (
    NotificationType,
    SuggestionAction,
    SuggestionStatus,
    TagLevel,
    TagStatus,
    TagUsage,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "TagId",
    "TagParentId",
    "TagSuggestionId",
    "NotificationId",
    # Types
    "TagLevel",
    "TagStatus",
    "TagUsage",
    "SuggestionStatus",
    "SuggestionAction",
    "UserRole",
    "NotificationType",
]
