"""List tags use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.domain.model import Tag
from kopiena.domain.service import TagService
from kopiena.domain.value import TagId


class TagItem(BaseModel):
    """Tag item in response."""

    id: str
    name: str
    level: int
    parent_id: str | None
    color_key: str | None
    icon_name: str | None
    description: str | None

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagItem":
        return cls(
            id=str(tag.id),
            name=tag.name,
            level=int(tag.level),
            parent_id=str(tag.parent_id) if tag.parent_id else None,
            color_key=tag.color_key,
            icon_name=tag.icon_name,
            description=tag.description,
        )


class ListTagsRequest(BaseModel):
    """List tags request."""

    level: int | None = None
    parent_id: str | None = None  # UUID string


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]


class ListTagsUseCase(BaseUseCase[ListTagsRequest, ListTagsResponse]):
    """Use case for browsing the taxonomy one level or parent at a time."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize list tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow.

        Args:
            request: List tags request

        Returns:
            ACTIVE tags matching the filters, ordered by name

        Raises:
            ValidationError: If the level is not 1, 2 or 3
        """
        with logfire.span(
            "list_tags.execute", level=request.level, parent_id=request.parent_id
        ):
            tags = await self.tag_service.list_tags(
                level=request.level,
                parent_id=TagId(UUID(request.parent_id)) if request.parent_id else None,
            )
            return ListTagsResponse(tags=[TagItem.from_tag(tag) for tag in tags])
