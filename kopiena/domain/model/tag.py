"""Tag entity: a node in the three-level taxonomy."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from kopiena.domain.model.common import DomainModel
from kopiena.domain.value import TagId, TagLevel, TagStatus


class Tag(DomainModel):
    """Taxonomy node.

    Level 1 tags are broad categories, level 2 tags are domains and level 3
    tags are specific interests. ``parent_id`` is the legacy single-parent
    pointer; it is authoritative for levels 2 and 3 and always empty for
    level 1. Additional memberships live in ``TagParent``.

    ``color_key`` and ``icon_name`` are opaque style keys resolved by the
    presentation layer. They are normally only set on level 1 tags.
    """

    id: TagId
    name: str = Field(min_length=1, max_length=100)
    level: TagLevel
    parent_id: Optional[TagId] = None
    status: TagStatus = TagStatus.ACTIVE
    color_key: Optional[str] = None
    icon_name: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_category_has_no_parent(self) -> "Tag":
        """Level 1 tags sit at the root of the tree."""
        if self.level == TagLevel.CATEGORY and self.parent_id is not None:
            raise ValueError("Level 1 tags cannot have a parent")
        return self

    @property
    def is_active(self) -> bool:
        return self.status == TagStatus.ACTIVE
