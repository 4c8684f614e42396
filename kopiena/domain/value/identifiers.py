"""Strongly typed identifiers for Kopiena domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
TagId = NewType("TagId", UUID)
TagParentId = NewType("TagParentId", UUID)
TagSuggestionId = NewType("TagSuggestionId", UUID)
NotificationId = NewType("NotificationId", UUID)
