"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from kopiena.domain.model.tag import Tag
from kopiena.domain.value import TagId, TagLevel, TagStatus, TagUsage


class TagRepository(ABC):
    """Repository interface for Tag aggregate."""

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Args:
            tag: Tag to save

        Returns:
            Saved tag
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID.

        Args:
            tag_id: Tag identifier

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query.

        Args:
            tag_ids: Tag identifiers

        Returns:
            Found tags (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        level: Optional[TagLevel] = None,
        parent_id: Optional[TagId] = None,
        status: Optional[TagStatus] = TagStatus.ACTIVE,
        limit: Optional[int] = None,
    ) -> list[Tag]:
        """Find tags ordered by name.

        Args:
            level: Only return tags on this level
            parent_id: Only return children of this tag, linked either through
                the legacy ``parent_id`` column or through any TagParent row
            status: Only return tags with this status (None for all)
            limit: Maximum number of tags to return

        Returns:
            List of tags
        """
        pass

    @abstractmethod
    async def find_by_names_insensitive(
        self, names: list[str], status: Optional[TagStatus] = TagStatus.ACTIVE
    ) -> list[Tag]:
        """Find tags whose name case-insensitively equals one of the given names.

        Args:
            names: Candidate names
            status: Only return tags with this status (None for all)

        Returns:
            Matching tags
        """
        pass

    @abstractmethod
    async def count_usage(self) -> dict[TagId, TagUsage]:
        """Count how many groups and events carry each tag.

        Returns:
            Usage per tag; tags without usage may be absent
        """
        pass
