"""PostgreSQL implementation of Tag repository."""

from typing import Optional

from sqlalchemy import func, insert, or_, select, update

from kopiena.domain.model.tag import Tag
from kopiena.domain.repository.tag import TagRepository
from kopiena.domain.value import TagId, TagLevel, TagStatus, TagUsage
from kopiena.persistence.mappers import row_to_tag, tag_to_dict
from kopiena.persistence.repository.base import PostgresRepository
from kopiena.persistence.tables import (
    event_tags_table,
    group_tags_table,
    tag_parents_table,
    tags_table,
)


class PostgresTagRepository(PostgresRepository, TagRepository):
    """PostgreSQL implementation of TagRepository."""

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        tag_dict = tag_to_dict(tag)

        existing = await self.find_by_id(tag.id)

        if existing:
            stmt = (
                update(tags_table).where(tags_table.c.id == tag.id).values(**tag_dict)
            )
        else:
            stmt = insert(tags_table).values(**tag_dict)
        await self._execute(stmt, flush=True)
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_tag(dict(row)) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query."""
        if not tag_ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self._execute(stmt)
        return [row_to_tag(dict(row)) for row in result.mappings().all()]

    async def find_all(
        self,
        level: Optional[TagLevel] = None,
        parent_id: Optional[TagId] = None,
        status: Optional[TagStatus] = TagStatus.ACTIVE,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find tags ordered by name."""
        stmt = select(tags_table).order_by(tags_table.c.name, tags_table.c.id)

        if level is not None:
            stmt = stmt.where(tags_table.c.level == int(level))
        if status is not None:
            stmt = stmt.where(tags_table.c.status == status.value)
        if parent_id is not None:
            linked = select(tag_parents_table.c.tag_id).where(
                tag_parents_table.c.parent_id == parent_id
            )
            stmt = stmt.where(
                or_(tags_table.c.parent_id == parent_id, tags_table.c.id.in_(linked))
            )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._execute(stmt)
        return [row_to_tag(dict(row)) for row in result.mappings().all()]

    async def find_by_names_insensitive(
        self, names: list[str], status: Optional[TagStatus] = TagStatus.ACTIVE
    ) -> list[Tag]:
        """Find tags whose lowercased name is one of the lowercased names."""
        if not names:
            return []

        stmt = select(tags_table).where(
            func.lower(tags_table.c.name).in_([name.lower() for name in names])
        )
        if status is not None:
            stmt = stmt.where(tags_table.c.status == status.value)

        result = await self._execute(stmt)
        return [row_to_tag(dict(row)) for row in result.mappings().all()]

    async def count_usage(self) -> dict[TagId, TagUsage]:
        """Count groups and events per tag with two grouped queries."""
        group_stmt = select(
            group_tags_table.c.tag_id, func.count().label("count")
        ).group_by(group_tags_table.c.tag_id)
        event_stmt = select(
            event_tags_table.c.tag_id, func.count().label("count")
        ).group_by(event_tags_table.c.tag_id)

        group_counts = {
            TagId(row.tag_id): row.count
            for row in (await self._execute(group_stmt)).all()
        }
        event_counts = {
            TagId(row.tag_id): row.count
            for row in (await self._execute(event_stmt)).all()
        }

        return {
            tag_id: TagUsage(
                group_count=group_counts.get(tag_id, 0),
                event_count=event_counts.get(tag_id, 0),
            )
            for tag_id in group_counts.keys() | event_counts.keys()
        }
