"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from kopiena.domain.model import Notification, Tag, TagParent, TagSuggestion, User
from kopiena.domain.value import (
    NotificationId,
    NotificationType,
    SuggestionStatus,
    TagId,
    TagLevel,
    TagParentId,
    TagStatus,
    TagSuggestionId,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row.get("name"),
        role=UserRole(row["role"]),
        pending_suggestion_count=row["pending_suggestion_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model.

    Args:
        row: Database row as dict

    Returns:
        Tag domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=row["name"],
        level=TagLevel(row["level"]),
        parent_id=TagId(parent_id) if parent_id else None,
        status=TagStatus(row["status"]),
        color_key=row.get("color_key"),
        icon_name=row.get("icon_name"),
        description=row.get("description"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict.

    Args:
        tag: Tag domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = tag.model_dump()
    data["level"] = int(tag.level)
    data["status"] = tag.status.value
    return data


def row_to_tag_parent(row: Dict[str, Any]) -> TagParent:
    """Convert database row to TagParent domain model."""
    return TagParent(
        id=TagParentId(_uuid(row["id"])),
        tag_id=TagId(_uuid(row["tag_id"])),
        parent_id=TagId(_uuid(row["parent_id"])),
        is_primary=row["is_primary"],
        l1_category=row.get("l1_category"),
        l1_color_key=row.get("l1_color_key"),
        created_at=row["created_at"],
    )


def tag_parent_to_dict(link: TagParent) -> Dict[str, Any]:
    """Convert TagParent domain model to database dict."""
    return link.model_dump()


def row_to_tag_suggestion(row: Dict[str, Any]) -> TagSuggestion:
    """Convert database row to TagSuggestion domain model.

    Args:
        row: Database row as dict

    Returns:
        TagSuggestion domain model
    """
    moderated_by_id = _optional_uuid(row.get("moderated_by_id"))
    merged_into_tag_id = _optional_uuid(row.get("merged_into_tag_id"))
    return TagSuggestion(
        id=TagSuggestionId(_uuid(row["id"])),
        name_en=row["name_en"],
        name_lv=row["name_lv"],
        level=TagLevel(row["level"]),
        parent_tag_ids=[TagId(_uuid(value)) for value in row["parent_tag_ids"]],
        suggested_by_id=UserId(_uuid(row["suggested_by_id"])),
        status=SuggestionStatus(row["status"]),
        moderated_by_id=UserId(moderated_by_id) if moderated_by_id else None,
        moderated_at=row.get("moderated_at"),
        moderator_notes=row.get("moderator_notes"),
        merged_into_tag_id=TagId(merged_into_tag_id) if merged_into_tag_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def tag_suggestion_to_dict(suggestion: TagSuggestion) -> Dict[str, Any]:
    """Convert TagSuggestion domain model to database dict.

    Args:
        suggestion: TagSuggestion domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = suggestion.model_dump()
    data["level"] = int(suggestion.level)
    data["status"] = suggestion.status.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row.get("message"),
        is_read=row["is_read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data
