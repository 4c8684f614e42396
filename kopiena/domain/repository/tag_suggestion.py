"""TagSuggestion repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from kopiena.domain.model.tag_suggestion import TagSuggestion
from kopiena.domain.value import SuggestionStatus, TagSuggestionId, UserId


class TagSuggestionRepository(ABC):
    """Repository interface for TagSuggestion aggregate."""

    @abstractmethod
    async def save(self, suggestion: TagSuggestion) -> TagSuggestion:
        """Insert a new suggestion.

        Args:
            suggestion: Suggestion to save

        Returns:
            Saved suggestion
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, suggestion_id: TagSuggestionId
    ) -> Optional[TagSuggestion]:
        """Find suggestion by ID.

        Args:
            suggestion_id: Suggestion identifier

        Returns:
            Suggestion if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_names(
        self, name_en: str, name_lv: str
    ) -> list[TagSuggestion]:
        """Find PENDING suggestions with a case-insensitively equal name.

        A suggestion matches when its ``name_en`` equals ``name_en`` or its
        ``name_lv`` equals ``name_lv``.

        Args:
            name_en: English name
            name_lv: Latvian name

        Returns:
            Matching pending suggestions
        """
        pass

    @abstractmethod
    async def find_by_status(self, status: SuggestionStatus) -> list[TagSuggestion]:
        """Find suggestions by status, oldest first.

        Args:
            status: Suggestion status

        Returns:
            List of suggestions
        """
        pass

    @abstractmethod
    async def save_resolution(self, suggestion: TagSuggestion) -> bool:
        """Write the moderation outcome of a suggestion.

        The write only applies while the stored suggestion is still PENDING,
        so two moderators can never both resolve it.

        Args:
            suggestion: Resolved suggestion

        Returns:
            True if the stored suggestion was updated, False if it had already
            left PENDING (or does not exist)
        """
        pass

    @abstractmethod
    async def count_pending_by_user(self, user_id: UserId) -> int:
        """Count a user's PENDING suggestions.

        Args:
            user_id: Submitter's identifier

        Returns:
            Number of pending suggestions
        """
        pass
