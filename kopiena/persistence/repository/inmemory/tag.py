"""In-memory tag repository for testing."""

from collections import Counter
from typing import Optional

from kopiena.domain.model.tag import Tag
from kopiena.domain.repository.tag import TagRepository
from kopiena.domain.value import TagId, TagLevel, TagStatus, TagUsage

from .database import InMemoryDatabase


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        self.database.tags[tag.id] = tag
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        return self.database.tags.get(tag_id)

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID."""
        wanted = set(tag_ids)
        return [tag for tag in self.database.tags.values() if tag.id in wanted]

    async def find_all(
        self,
        level: Optional[TagLevel] = None,
        parent_id: Optional[TagId] = None,
        status: Optional[TagStatus] = TagStatus.ACTIVE,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find tags ordered by name."""
        linked = (
            {
                link.tag_id
                for link in self.database.tag_parents.values()
                if link.parent_id == parent_id
            }
            if parent_id is not None
            else set()
        )

        tags = [
            tag
            for tag in self.database.tags.values()
            if (level is None or tag.level == level)
            and (status is None or tag.status == status)
            and (parent_id is None or tag.parent_id == parent_id or tag.id in linked)
        ]
        tags.sort(key=lambda tag: (tag.name, str(tag.id)))
        return tags[:limit] if limit is not None else tags

    async def find_by_names_insensitive(
        self, names: list[str], status: Optional[TagStatus] = TagStatus.ACTIVE
    ) -> list[Tag]:
        """Find tags whose lowercased name is one of the lowercased names."""
        wanted = {name.lower() for name in names}
        return [
            tag
            for tag in self.database.tags.values()
            if tag.name.lower() in wanted and (status is None or tag.status == status)
        ]

    async def count_usage(self) -> dict[TagId, TagUsage]:
        """Count seeded group and event tag pairs."""
        groups = Counter(tag_id for _, tag_id in self.database.group_tags)
        events = Counter(tag_id for _, tag_id in self.database.event_tags)
        return {
            tag_id: TagUsage(group_count=groups[tag_id], event_count=events[tag_id])
            for tag_id in groups.keys() | events.keys()
        }
