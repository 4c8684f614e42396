"""Response models shared by suggestion use cases."""

from datetime import datetime

from pydantic import BaseModel

from kopiena.domain.model import TagSuggestion
from kopiena.domain.value import SuggestionStatus


class SuggestionInfo(BaseModel):
    """Tag suggestion in response."""

    id: str
    name_en: str
    name_lv: str
    level: int
    parent_tag_ids: list[str]
    suggested_by_id: str
    status: SuggestionStatus
    moderated_by_id: str | None
    moderated_at: datetime | None
    moderator_notes: str | None
    merged_into_tag_id: str | None
    created_at: datetime

    @classmethod
    def from_suggestion(cls, suggestion: TagSuggestion) -> "SuggestionInfo":
        return cls(
            id=str(suggestion.id),
            name_en=suggestion.name_en,
            name_lv=suggestion.name_lv,
            level=int(suggestion.level),
            parent_tag_ids=[str(tag_id) for tag_id in suggestion.parent_tag_ids],
            suggested_by_id=str(suggestion.suggested_by_id),
            status=suggestion.status,
            moderated_by_id=(
                str(suggestion.moderated_by_id) if suggestion.moderated_by_id else None
            ),
            moderated_at=suggestion.moderated_at,
            moderator_notes=suggestion.moderator_notes,
            merged_into_tag_id=(
                str(suggestion.merged_into_tag_id)
                if suggestion.merged_into_tag_id
                else None
            ),
            created_at=suggestion.created_at,
        )
