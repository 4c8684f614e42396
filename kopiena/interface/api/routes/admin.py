"""Moderator routes for the tag taxonomy."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from kopiena.application.usecase.suggestion import (
    ListSuggestionsRequest,
    ListSuggestionsResponse,
    ListSuggestionsUseCase,
    ReconcilePendingCountRequest,
    ReconcilePendingCountResponse,
    ReconcilePendingCountUseCase,
    ResolveSuggestionRequest,
    ResolveSuggestionResponse,
    ResolveSuggestionUseCase,
)
from kopiena.application.usecase.tag import (
    AssignTagParentRequest,
    AssignTagParentResponse,
    AssignTagParentUseCase,
)
from kopiena.domain.service import JWTService
from kopiena.domain.value import SuggestionAction

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.get("/tag-suggestions", response_model=ListSuggestionsResponse)
async def list_suggestions(
    use_case: FromDishka[ListSuggestionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListSuggestionsResponse:
    """List PENDING suggestions, oldest first.

    Requires moderator role.

    Args:
        use_case: List suggestions use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        Review queue with submitters and parent tags
    """
    actor_id = jwt_service.get_user_id_from_token(auth_token)
    return await use_case.execute(ListSuggestionsRequest(actor_id=actor_id))


class ResolveSuggestionAPIRequest(BaseModel):
    """API request for resolving a suggestion."""

    action: SuggestionAction
    moderator_notes: str | None = Field(default=None, max_length=1000)
    merged_into_tag_id: UUID | None = None


@router.patch("/tag-suggestions/{suggestion_id}", response_model=ResolveSuggestionResponse)
async def resolve_suggestion(
    suggestion_id: UUID,
    request: ResolveSuggestionAPIRequest,
    use_case: FromDishka[ResolveSuggestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ResolveSuggestionResponse:
    """Approve, deny or merge a suggestion.

    Requires moderator role.

    Args:
        suggestion_id: Suggestion to resolve
        request: Action with optional notes and merge target
        use_case: Resolve suggestion use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The resolved suggestion, with the new tag on approval
    """
    actor_id = jwt_service.get_user_id_from_token(auth_token)
    with logfire.span(
        "api.resolve_suggestion",
        suggestion_id=str(suggestion_id),
        action=request.action.value,
    ):
        return await use_case.execute(
            ResolveSuggestionRequest(
                actor_id=actor_id,
                suggestion_id=str(suggestion_id),
                action=request.action,
                moderator_notes=request.moderator_notes,
                merged_into_tag_id=(
                    str(request.merged_into_tag_id)
                    if request.merged_into_tag_id
                    else None
                ),
            )
        )


class AssignTagParentAPIRequest(BaseModel):
    """API request for linking a tag to another parent."""

    parent_id: UUID
    is_primary: bool = False


@router.post(
    "/tags/{tag_id}/parents",
    response_model=AssignTagParentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_tag_parent(
    tag_id: UUID,
    request: AssignTagParentAPIRequest,
    use_case: FromDishka[AssignTagParentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AssignTagParentResponse:
    """Link a tag to an additional parent, or move its primary parent.

    Requires moderator role.

    Args:
        tag_id: Child tag
        request: Parent and whether the link becomes primary
        use_case: Assign tag parent use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The created link
    """
    actor_id = jwt_service.get_user_id_from_token(auth_token)
    return await use_case.execute(
        AssignTagParentRequest(
            actor_id=actor_id,
            tag_id=str(tag_id),
            parent_id=str(request.parent_id),
            is_primary=request.is_primary,
        )
    )


@router.post(
    "/users/{user_id}/pending-suggestions/reconcile",
    response_model=ReconcilePendingCountResponse,
)
async def reconcile_pending_count(
    user_id: UUID,
    use_case: FromDishka[ReconcilePendingCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReconcilePendingCountResponse:
    """Recount a user's PENDING suggestions and store the result.

    Requires moderator role.

    Args:
        user_id: User whose counter is repaired
        use_case: Reconcile use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        The recounted value
    """
    actor_id = jwt_service.get_user_id_from_token(auth_token)
    return await use_case.execute(
        ReconcilePendingCountRequest(actor_id=actor_id, user_id=str(user_id))
    )
