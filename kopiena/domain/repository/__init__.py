"""Repository interfaces for Kopiena domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from kopiena.domain.repository.notification import NotificationRepository
from kopiena.domain.repository.tag import TagRepository
from kopiena.domain.repository.tag_parent import TagParentRepository
from kopiena.domain.repository.tag_suggestion import TagSuggestionRepository
from kopiena.domain.repository.unit_of_work import UnitOfWork
from kopiena.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "TagRepository",
    "TagParentRepository",
    "TagSuggestionRepository",
    "NotificationRepository",
    "UnitOfWork",
]
