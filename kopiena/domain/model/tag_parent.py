"""Many-to-many link between a tag and one of its parents."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from kopiena.domain.model.common import DomainModel
from kopiena.domain.value import TagId, TagParentId


class TagParent(DomainModel):
    """Membership of a tag in a parent one level above it.

    Exactly one link per tag is primary; the primary edge is the only one
    used for hierarchy display and path reconstruction. Secondary links are
    tagging metadata for filtering.

    ``l1_category`` and ``l1_color_key`` are copied from the parent's level 1
    ancestor so the hierarchy can be displayed without a full join.
    """

    id: TagParentId
    tag_id: TagId
    parent_id: TagId
    is_primary: bool = False
    l1_category: Optional[str] = None
    l1_color_key: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
