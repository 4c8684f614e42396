"""TagParent repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from kopiena.domain.model.tag_parent import TagParent
from kopiena.domain.value import TagId


class TagParentRepository(ABC):
    """Repository interface for tag-to-parent links."""

    @abstractmethod
    async def save(self, link: TagParent) -> TagParent:
        """Insert a link.

        Args:
            link: Link to save

        Returns:
            Saved link

        Raises:
            DuplicateError: If the tag is already linked to that parent
        """
        pass

    @abstractmethod
    async def find_by_tag_ids(
        self, tag_ids: list[TagId], is_primary: Optional[bool] = None
    ) -> list[TagParent]:
        """Find links of the given tags in a single query.

        Args:
            tag_ids: Child tag identifiers
            is_primary: Only return primary (True) or secondary (False) links

        Returns:
            Matching links
        """
        pass

    @abstractmethod
    async def update_l1_for_parent(
        self, parent_id: TagId, l1_category: str | None, l1_color_key: str | None
    ) -> None:
        """Rewrite the denormalized category on every link pointing at a parent.

        Used when a level 2 tag moves to another category, so its children
        keep showing the right category name and color.

        Args:
            parent_id: Level 2 parent whose incoming links change
            l1_category: New category name
            l1_color_key: New category color key
        """
        pass

    @abstractmethod
    async def demote_primary(self, tag_id: TagId) -> None:
        """Mark every link of a tag as secondary.

        Args:
            tag_id: Child tag identifier
        """
        pass
