"""In-memory tag parent repository for testing."""

from typing import Optional

from kopiena.domain.error import DuplicateError
from kopiena.domain.model.tag_parent import TagParent
from kopiena.domain.repository.tag_parent import TagParentRepository
from kopiena.domain.value import TagId

from .database import InMemoryDatabase


class InMemoryTagParentRepository(TagParentRepository):
    """In-memory implementation of TagParentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def save(self, link: TagParent) -> TagParent:
        """Insert a link, enforcing the same uniqueness as the database."""
        for existing in self.database.tag_parents.values():
            if existing.tag_id != link.tag_id:
                continue
            if existing.parent_id == link.parent_id:
                raise DuplicateError("Record already exists")
            if existing.is_primary and link.is_primary:
                raise DuplicateError("Tag already has a primary parent")
        self.database.tag_parents[link.id] = link
        return link

    async def find_by_tag_ids(
        self, tag_ids: list[TagId], is_primary: Optional[bool] = None
    ) -> list[TagParent]:
        """Find links of the given tags."""
        wanted = set(tag_ids)
        links = [
            link
            for link in self.database.tag_parents.values()
            if link.tag_id in wanted
            and (is_primary is None or link.is_primary == is_primary)
        ]
        return sorted(links, key=lambda link: link.created_at)

    async def demote_primary(self, tag_id: TagId) -> None:
        """Clear the primary flag on every link of a tag."""
        for link_id, link in list(self.database.tag_parents.items()):
            if link.tag_id == tag_id and link.is_primary:
                self.database.tag_parents[link_id] = link.model_copy(
                    update={"is_primary": False}
                )

    async def update_l1_for_parent(
        self, parent_id: TagId, l1_category: str | None, l1_color_key: str | None
    ) -> None:
        """Rewrite the denormalized category on links pointing at a parent."""
        for link_id, link in list(self.database.tag_parents.items()):
            if link.parent_id == parent_id:
                self.database.tag_parents[link_id] = link.model_copy(
                    update={"l1_category": l1_category, "l1_color_key": l1_color_key}
                )
