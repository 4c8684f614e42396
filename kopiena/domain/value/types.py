"""Domain value objects for Kopiena.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum, IntEnum

from pydantic import Field

from kopiena.domain.value.common import ValueObject


class TagLevel(IntEnum):
    """Tier of a tag in the taxonomy."""

    CATEGORY = 1  # Broad category, e.g. "Movement & Wellness"
    DOMAIN = 2  # e.g. "Team Sports"
    INTEREST = 3  # Specific interest, e.g. "Basketball"

    @property
    def parent_level(self) -> "TagLevel | None":
        """Level of this tier's parents, None for categories."""
        if self is TagLevel.CATEGORY:
            return None
        return TagLevel(self - 1)


class TagStatus(str, Enum):
    """Lifecycle status of a tag. Tags are deactivated, never deleted."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SuggestionStatus(str, Enum):
    """Moderation status of a tag suggestion."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    MERGED = "MERGED"

    @property
    def is_terminal(self) -> bool:
        return self is not SuggestionStatus.PENDING


class SuggestionAction(str, Enum):
    """Moderator decision on a pending suggestion."""

    APPROVE = "approve"
    DENY = "deny"
    MERGE = "merge"


class UserRole(str, Enum):
    """Platform role."""

    USER = "USER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class NotificationType(str, Enum):
    """Notification kinds emitted by the taxonomy."""

    TAG_SUGGESTION_APPROVED = "TAG_SUGGESTION_APPROVED"
    TAG_SUGGESTION_DENIED = "TAG_SUGGESTION_DENIED"
    TAG_SUGGESTION_MERGED = "TAG_SUGGESTION_MERGED"


class TagUsage(ValueObject):
    """How many groups and events carry a tag."""

    group_count: int = Field(default=0, ge=0)
    event_count: int = Field(default=0, ge=0)
