"""Get tag tree use case."""

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.domain.service import TagService, TagTreeNode


class TagTreeItem(BaseModel):
    """Node of the taxonomy tree in response."""

    id: str
    name: str
    level: int
    color_key: str | None
    icon_name: str | None
    group_count: int
    event_count: int
    total_group_count: int
    total_event_count: int
    children: list["TagTreeItem"]

    @classmethod
    def from_node(cls, node: TagTreeNode) -> "TagTreeItem":
        return cls(
            id=str(node.tag_id),
            name=node.name,
            level=int(node.level),
            color_key=node.color_key,
            icon_name=node.icon_name,
            group_count=node.group_count,
            event_count=node.event_count,
            total_group_count=node.total_group_count,
            total_event_count=node.total_event_count,
            children=[cls.from_node(child) for child in node.children],
        )


class GetTagTreeResponse(BaseModel):
    """Get tag tree response."""

    tree: list[TagTreeItem]


class GetTagTreeUseCase(BaseUseCase[None, GetTagTreeResponse]):
    """Use case for fetching the whole taxonomy tree."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize get tag tree use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: None = None) -> GetTagTreeResponse:
        """Execute get tag tree flow.

        Returns:
            Level 1 nodes with nested children and usage counts
        """
        with logfire.span("get_tag_tree.execute"):
            tree = await self.tag_service.build_tree()
            return GetTagTreeResponse(tree=[TagTreeItem.from_node(n) for n in tree])
