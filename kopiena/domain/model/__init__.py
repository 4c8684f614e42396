"""Domain model entities for Kopiena."""

from kopiena.domain.model.notification import Notification
from kopiena.domain.model.tag import Tag
from kopiena.domain.model.tag_parent import TagParent
from kopiena.domain.model.tag_suggestion import TagSuggestion
from kopiena.domain.model.user import User

__all__ = [
    "User",
    "Tag",
    "TagParent",
    "TagSuggestion",
    "Notification",
]
