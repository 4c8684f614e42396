"""Tag suggestion aggregate: a user-proposed level 3 tag awaiting review."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from kopiena.domain.model.common import DomainModel
from kopiena.domain.value import (
    SuggestionStatus,
    TagId,
    TagLevel,
    TagSuggestionId,
    UserId,
)


class TagSuggestion(DomainModel):
    """User-submitted proposal for a new level 3 tag.

    Moves from PENDING to exactly one of APPROVED, DENIED or MERGED and is
    never reopened. ``parent_tag_ids`` is ordered; the first entry becomes
    the primary parent when the suggestion is approved.
    """

    id: TagSuggestionId
    name_en: str = Field(min_length=1, max_length=100)
    name_lv: str = Field(min_length=1, max_length=100)
    level: TagLevel = TagLevel.INTEREST
    parent_tag_ids: list[TagId] = Field(min_length=1)
    suggested_by_id: UserId
    status: SuggestionStatus = SuggestionStatus.PENDING
    moderated_by_id: Optional[UserId] = None
    moderated_at: Optional[datetime] = None
    moderator_notes: Optional[str] = None
    merged_into_tag_id: Optional[TagId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_pending(self) -> bool:
        return self.status == SuggestionStatus.PENDING

    def resolve(
        self,
        status: SuggestionStatus,
        moderator_id: UserId,
        notes: Optional[str] = None,
        merged_into_tag_id: Optional[TagId] = None,
    ) -> "TagSuggestion":
        """Return a resolved copy of this suggestion.

        Raises:
            ValueError: If the target status is PENDING, or a merge has no target
        """
        if not status.is_terminal:
            raise ValueError("A suggestion can only be resolved to a terminal status")
        if (status == SuggestionStatus.MERGED) != (merged_into_tag_id is not None):
            raise ValueError("merged_into_tag_id is set only for merged suggestions")

        now = datetime.now()
        return self.model_copy(
            update={
                "status": status,
                "moderated_by_id": moderator_id,
                "moderated_at": now,
                "moderator_notes": notes,
                "merged_into_tag_id": merged_into_tag_id,
                "updated_at": now,
            }
        )
