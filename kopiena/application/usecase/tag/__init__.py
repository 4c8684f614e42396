"""Tag use cases."""

from .assign_tag_parent import (
    AssignTagParentRequest,
    AssignTagParentResponse,
    AssignTagParentUseCase,
)
from .get_tag_tree import GetTagTreeResponse, GetTagTreeUseCase, TagTreeItem
from .list_tags import ListTagsRequest, ListTagsResponse, ListTagsUseCase, TagItem
from .search_tags import (
    HierarchyInfo,
    SearchTagItem,
    SearchTagsRequest,
    SearchTagsResponse,
    SearchTagsUseCase,
)

__all__ = [
    "AssignTagParentRequest",
    "AssignTagParentResponse",
    "AssignTagParentUseCase",
    "GetTagTreeResponse",
    "GetTagTreeUseCase",
    "HierarchyInfo",
    "ListTagsRequest",
    "ListTagsResponse",
    "ListTagsUseCase",
    "SearchTagItem",
    "SearchTagsRequest",
    "SearchTagsResponse",
    "SearchTagsUseCase",
    "TagItem",
    "TagTreeItem",
]
