"""In-memory repository implementations for testing."""

from .database import InMemoryDatabase
from .notification import InMemoryNotificationRepository
from .tag import InMemoryTagRepository
from .tag_parent import InMemoryTagParentRepository
from .tag_suggestion import InMemoryTagSuggestionRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryNotificationRepository",
    "InMemoryTagRepository",
    "InMemoryTagParentRepository",
    "InMemoryTagSuggestionRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
