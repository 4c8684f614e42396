"""Tag routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from kopiena.application.usecase.suggestion import (
    CreateSuggestionRequest,
    CreateSuggestionResponse,
    CreateSuggestionUseCase,
    GetPendingCountRequest,
    GetPendingCountResponse,
    GetPendingCountUseCase,
)
from kopiena.application.usecase.tag import (
    GetTagTreeResponse,
    GetTagTreeUseCase,
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
    SearchTagsRequest,
    SearchTagsResponse,
    SearchTagsUseCase,
)
from kopiena.domain.service import JWTService

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


@router.get(
    "",
    response_model=ListTagsResponse,
    summary="List tags",
    description="List ACTIVE tags, optionally filtered by level or parent.",
)
async def list_tags(
    use_case: FromDishka[ListTagsUseCase],
    level: int | None = None,
    parent_id: UUID | None = None,
) -> ListTagsResponse:
    """List tags.

    Args:
        use_case: List tags use case (injected)
        level: Only return tags on this level (1-3)
        parent_id: Only return children of this tag

    Returns:
        List of tags ordered by name

    Example:
        GET /tags?level=2&parent_id=...
    """
    with logfire.span("api.list_tags", level=level):
        request = ListTagsRequest(
            level=level, parent_id=str(parent_id) if parent_id else None
        )
        return await use_case.execute(request)


@router.get(
    "/search",
    response_model=SearchTagsResponse,
    summary="Search tags",
    description="Fuzzy type-ahead search with each hit's category path.",
)
async def search_tags(
    use_case: FromDishka[SearchTagsUseCase],
    q: str = "",
    level: int | None = None,
    limit: int | None = None,
) -> SearchTagsResponse:
    """Search tags by name.

    Args:
        use_case: Search tags use case (injected)
        q: Query, at least two characters
        level: Only search this level
        limit: Maximum number of hits

    Returns:
        Ranked hits

    Example:
        GET /tags/search?q=basket&limit=5
    """
    with logfire.span("api.search_tags", q=q, level=level, limit=limit):
        request = SearchTagsRequest(query=q, level=level, limit=limit)
        return await use_case.execute(request)


@router.get(
    "/tree",
    response_model=GetTagTreeResponse,
    summary="Get the tag tree",
    description="The full taxonomy as nested categories with usage counts.",
)
async def get_tag_tree(use_case: FromDishka[GetTagTreeUseCase]) -> GetTagTreeResponse:
    """Get the nested taxonomy.

    Args:
        use_case: Get tag tree use case (injected)

    Returns:
        Root categories with their subtrees
    """
    with logfire.span("api.get_tag_tree"):
        return await use_case.execute()


class CreateSuggestionAPIRequest(BaseModel):
    """API request for suggesting a tag."""

    name_en: str | None = Field(default=None, max_length=100)
    name_lv: str | None = Field(default=None, max_length=100)
    parent_tag_ids: list[UUID] = []


@router.post(
    "/suggest",
    response_model=CreateSuggestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_suggestion(
    request: CreateSuggestionAPIRequest,
    use_case: FromDishka[CreateSuggestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateSuggestionResponse:
    """Suggest a new interest tag for moderator review.

    Requires authentication.

    Args:
        request: Suggested names and parent domains
        use_case: Create suggestion use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The PENDING suggestion
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    use_case_request = CreateSuggestionRequest(
        user_id=user_id,
        name_en=request.name_en,
        name_lv=request.name_lv,
        parent_tag_ids=[str(tag_id) for tag_id in request.parent_tag_ids],
    )
    return await use_case.execute(use_case_request)


@router.get("/suggest/count", response_model=GetPendingCountResponse)
async def get_pending_count(
    use_case: FromDishka[GetPendingCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPendingCountResponse:
    """Get how many suggestions the caller has awaiting review.

    Anonymous callers get a count of 0.

    Args:
        use_case: Get pending count use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        Pending count and the quota
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    return await use_case.execute(GetPendingCountRequest(user_id=user_id))
