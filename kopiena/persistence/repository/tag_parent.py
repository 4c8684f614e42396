"""PostgreSQL implementation of TagParent repository."""

from typing import Optional

from sqlalchemy import insert, select, update

from kopiena.domain.model.tag_parent import TagParent
from kopiena.domain.repository.tag_parent import TagParentRepository
from kopiena.domain.value import TagId
from kopiena.persistence.mappers import row_to_tag_parent, tag_parent_to_dict
from kopiena.persistence.repository.base import PostgresRepository
from kopiena.persistence.tables import tag_parents_table


class PostgresTagParentRepository(PostgresRepository, TagParentRepository):
    """PostgreSQL implementation of TagParentRepository."""

    async def save(self, link: TagParent) -> TagParent:
        """Insert a link; uq_tag_parent turns a duplicate into DuplicateError."""
        stmt = insert(tag_parents_table).values(**tag_parent_to_dict(link))
        await self._execute(stmt, flush=True)
        return link

    async def find_by_tag_ids(
        self, tag_ids: list[TagId], is_primary: Optional[bool] = None
    ) -> list[TagParent]:
        """Find links of the given tags."""
        if not tag_ids:
            return []

        stmt = (
            select(tag_parents_table)
            .where(tag_parents_table.c.tag_id.in_(tag_ids))
            .order_by(tag_parents_table.c.created_at)
        )
        if is_primary is not None:
            stmt = stmt.where(tag_parents_table.c.is_primary == is_primary)

        result = await self._execute(stmt)
        return [row_to_tag_parent(dict(row)) for row in result.mappings().all()]

    async def demote_primary(self, tag_id: TagId) -> None:
        """Clear the primary flag on every link of a tag."""
        stmt = (
            update(tag_parents_table)
            .where(tag_parents_table.c.tag_id == tag_id)
            .where(tag_parents_table.c.is_primary.is_(True))
            .values(is_primary=False)
        )
        await self._execute(stmt, flush=True)

    async def update_l1_for_parent(
        self, parent_id: TagId, l1_category: str | None, l1_color_key: str | None
    ) -> None:
        """Rewrite the denormalized category on links pointing at a parent."""
        stmt = (
            update(tag_parents_table)
            .where(tag_parents_table.c.parent_id == parent_id)
            .values(l1_category=l1_category, l1_color_key=l1_color_key)
        )
        await self._execute(stmt, flush=True)
