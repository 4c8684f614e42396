"""PostgreSQL repository implementations."""

from kopiena.persistence.repository.notification import PostgresNotificationRepository
from kopiena.persistence.repository.tag import PostgresTagRepository
from kopiena.persistence.repository.tag_parent import PostgresTagParentRepository
from kopiena.persistence.repository.tag_suggestion import (
    PostgresTagSuggestionRepository,
)
from kopiena.persistence.repository.unit_of_work import PostgresUnitOfWork
from kopiena.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresTagRepository",
    "PostgresTagParentRepository",
    "PostgresTagSuggestionRepository",
    "PostgresNotificationRepository",
    "PostgresUnitOfWork",
]
