"""Search tags use case."""

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.domain.service import TagHierarchy, TagService


class CategoryInfo(BaseModel):
    """Level 1 ancestor in a hierarchy path."""

    id: str | None
    name: str | None


class DomainInfo(BaseModel):
    """Level 2 ancestor in a hierarchy path."""

    id: str
    name: str


class HierarchyInfo(BaseModel):
    """Primary-parent path of a search hit."""

    l1: CategoryInfo
    l2: DomainInfo | None
    # "Movement & Wellness > Team Sports > Basketball"
    path: str
    color_key: str | None

    @classmethod
    def from_hierarchy(cls, hierarchy: TagHierarchy) -> "HierarchyInfo":
        return cls(
            l1=CategoryInfo(
                id=str(hierarchy.l1_id) if hierarchy.l1_id else None,
                name=hierarchy.l1_name,
            ),
            l2=(
                DomainInfo(id=str(hierarchy.l2_id), name=hierarchy.l2_name or "")
                if hierarchy.l2_id
                else None
            ),
            path=hierarchy.path,
            color_key=hierarchy.color_key,
        )


class SearchTagItem(BaseModel):
    """Search hit in response."""

    id: str
    name: str
    level: int
    color_key: str | None
    icon_name: str | None
    description: str | None
    hierarchy: HierarchyInfo | None


class SearchTagsRequest(BaseModel):
    """Search tags request."""

    query: str
    level: int | None = None
    limit: int | None = None


class SearchTagsResponse(BaseModel):
    """Search tags response."""

    tags: list[SearchTagItem]
    total: int  # Relevant matches before the limit
    candidates: int  # Tags considered by the ranker


class SearchTagsUseCase(BaseUseCase[SearchTagsRequest, SearchTagsResponse]):
    """Use case for type-ahead tag search."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize search tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: SearchTagsRequest) -> SearchTagsResponse:
        """Execute search flow.

        Args:
            request: Search tags request

        Returns:
            Ranked hits with hierarchy paths

        Raises:
            ValidationError: If the query is too short or level/limit invalid
            StorageError: If the store fails
        """
        with logfire.span("search_tags.execute", query=request.query):
            result = await self.tag_service.search(
                request.query, level=request.level, limit=request.limit
            )
            return SearchTagsResponse(
                tags=[
                    SearchTagItem(
                        id=str(hit.tag.id),
                        name=hit.tag.name,
                        level=int(hit.tag.level),
                        color_key=hit.tag.color_key,
                        icon_name=hit.tag.icon_name,
                        description=hit.tag.description,
                        hierarchy=(
                            HierarchyInfo.from_hierarchy(hit.hierarchy)
                            if hit.hierarchy
                            else None
                        ),
                    )
                    for hit in result.hits
                ],
                total=result.total,
                candidates=result.candidates,
            )
