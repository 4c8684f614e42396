"""PostgreSQL implementation of TagSuggestion repository."""

from typing import Optional

from sqlalchemy import func, insert, or_, select, update

from kopiena.domain.model.tag_suggestion import TagSuggestion
from kopiena.domain.repository.tag_suggestion import TagSuggestionRepository
from kopiena.domain.value import SuggestionStatus, TagSuggestionId, UserId
from kopiena.persistence.mappers import row_to_tag_suggestion, tag_suggestion_to_dict
from kopiena.persistence.repository.base import PostgresRepository
from kopiena.persistence.tables import tag_suggestions_table


class PostgresTagSuggestionRepository(PostgresRepository, TagSuggestionRepository):
    """PostgreSQL implementation of TagSuggestionRepository."""

    async def save(self, suggestion: TagSuggestion) -> TagSuggestion:
        """Insert a new suggestion."""
        stmt = insert(tag_suggestions_table).values(
            **tag_suggestion_to_dict(suggestion)
        )
        await self._execute(stmt, flush=True)
        return suggestion

    async def find_by_id(
        self, suggestion_id: TagSuggestionId
    ) -> Optional[TagSuggestion]:
        """Find suggestion by ID."""
        stmt = select(tag_suggestions_table).where(
            tag_suggestions_table.c.id == suggestion_id
        )
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_tag_suggestion(dict(row)) if row else None

    async def find_pending_by_names(
        self, name_en: str, name_lv: str
    ) -> list[TagSuggestion]:
        """Find PENDING suggestions with a case-insensitively equal name."""
        stmt = select(tag_suggestions_table).where(
            tag_suggestions_table.c.status == SuggestionStatus.PENDING.value,
            or_(
                func.lower(tag_suggestions_table.c.name_en) == name_en.lower(),
                func.lower(tag_suggestions_table.c.name_lv) == name_lv.lower(),
            ),
        )
        result = await self._execute(stmt)
        return [row_to_tag_suggestion(dict(row)) for row in result.mappings().all()]

    async def find_by_status(self, status: SuggestionStatus) -> list[TagSuggestion]:
        """Find suggestions by status, oldest first."""
        stmt = (
            select(tag_suggestions_table)
            .where(tag_suggestions_table.c.status == status.value)
            .order_by(tag_suggestions_table.c.created_at, tag_suggestions_table.c.id)
        )
        result = await self._execute(stmt)
        return [row_to_tag_suggestion(dict(row)) for row in result.mappings().all()]

    async def save_resolution(self, suggestion: TagSuggestion) -> bool:
        """Conditionally write the resolution of a still-PENDING suggestion.

        The ``status = 'PENDING'`` guard makes the write a compare-and-set:
        of two concurrent resolutions only the first updates a row.
        """
        stmt = (
            update(tag_suggestions_table)
            .where(tag_suggestions_table.c.id == suggestion.id)
            .where(tag_suggestions_table.c.status == SuggestionStatus.PENDING.value)
            .values(
                status=suggestion.status.value,
                moderated_by_id=suggestion.moderated_by_id,
                moderated_at=suggestion.moderated_at,
                moderator_notes=suggestion.moderator_notes,
                merged_into_tag_id=suggestion.merged_into_tag_id,
                updated_at=suggestion.updated_at,
            )
        )
        result = await self._execute(stmt, flush=True)
        return result.rowcount == 1

    async def count_pending_by_user(self, user_id: UserId) -> int:
        """Count a user's PENDING suggestions."""
        stmt = (
            select(func.count())
            .select_from(tag_suggestions_table)
            .where(tag_suggestions_table.c.suggested_by_id == user_id)
            .where(tag_suggestions_table.c.status == SuggestionStatus.PENDING.value)
        )
        result = await self._execute(stmt)
        return result.scalar_one()
