"""In-memory tag suggestion repository for testing."""

from typing import Optional

from kopiena.domain.model.tag_suggestion import TagSuggestion
from kopiena.domain.repository.tag_suggestion import TagSuggestionRepository
from kopiena.domain.value import SuggestionStatus, TagSuggestionId, UserId

from .database import InMemoryDatabase


class InMemoryTagSuggestionRepository(TagSuggestionRepository):
    """In-memory implementation of TagSuggestionRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def save(self, suggestion: TagSuggestion) -> TagSuggestion:
        """Insert a new suggestion."""
        self.database.tag_suggestions[suggestion.id] = suggestion
        return suggestion

    async def find_by_id(
        self, suggestion_id: TagSuggestionId
    ) -> Optional[TagSuggestion]:
        """Find suggestion by ID."""
        return self.database.tag_suggestions.get(suggestion_id)

    async def find_pending_by_names(
        self, name_en: str, name_lv: str
    ) -> list[TagSuggestion]:
        """Find PENDING suggestions with a case-insensitively equal name."""
        return [
            s
            for s in self.database.tag_suggestions.values()
            if s.status == SuggestionStatus.PENDING
            and (
                s.name_en.lower() == name_en.lower()
                or s.name_lv.lower() == name_lv.lower()
            )
        ]

    async def find_by_status(self, status: SuggestionStatus) -> list[TagSuggestion]:
        """Find suggestions by status, oldest first."""
        return sorted(
            (s for s in self.database.tag_suggestions.values() if s.status == status),
            key=lambda s: s.created_at,
        )

    async def save_resolution(self, suggestion: TagSuggestion) -> bool:
        """Write a resolution only if the stored suggestion is still PENDING."""
        stored = self.database.tag_suggestions.get(suggestion.id)
        if not stored or stored.status != SuggestionStatus.PENDING:
            return False
        self.database.tag_suggestions[suggestion.id] = suggestion
        return True

    async def count_pending_by_user(self, user_id: UserId) -> int:
        """Count a user's PENDING suggestions."""
        return sum(
            1
            for s in self.database.tag_suggestions.values()
            if s.suggested_by_id == user_id and s.status == SuggestionStatus.PENDING
        )
