"""Resolve tag suggestion use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.application.usecase.authorization import require_moderator
from kopiena.application.usecase.tag.list_tags import TagItem
from kopiena.domain.service import SuggestionService, UserService
from kopiena.domain.value import SuggestionAction, TagId, TagSuggestionId

from .common import SuggestionInfo


class ResolveSuggestionRequest(BaseModel):
    """Resolve suggestion request."""

    actor_id: str | None  # Signed-in user, None if anonymous
    suggestion_id: str
    action: SuggestionAction
    moderator_notes: str | None = None
    merged_into_tag_id: str | None = None


class ResolveSuggestionResponse(BaseModel):
    """Resolve suggestion response."""

    suggestion: SuggestionInfo
    tag: TagItem | None  # Set when the suggestion was approved
    notified: bool


class ResolveSuggestionUseCase(
    BaseUseCase[ResolveSuggestionRequest, ResolveSuggestionResponse]
):
    """Use case for approving, denying or merging a suggestion."""

    def __init__(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> None:
        """Initialize resolve suggestion use case.

        Args:
            suggestion_service: Suggestion domain service
            user_service: User domain service
        """
        self.suggestion_service = suggestion_service
        self.user_service = user_service

    async def execute(
        self, request: ResolveSuggestionRequest
    ) -> ResolveSuggestionResponse:
        """Execute resolve suggestion flow.

        Steps:
        1. Check the caller is a moderator
        2. Apply the action via suggestion service

        Args:
            request: Resolve suggestion request

        Returns:
            The resolved suggestion and, on approval, the created tag

        Raises:
            AuthorizationError: If the caller is not a moderator
            NotFoundError: If the suggestion does not exist
            InvalidStateError: If the suggestion was already resolved
            ValidationError: If a merge has no target
            UnknownMergeTargetError: If the merge target does not exist
        """
        with logfire.span(
            "resolve_suggestion.execute",
            suggestion_id=request.suggestion_id,
            action=request.action.value,
        ):
            moderator = await require_moderator(self.user_service, request.actor_id)

            resolution = await self.suggestion_service.resolve(
                TagSuggestionId(UUID(request.suggestion_id)),
                request.action,
                moderator_id=moderator.id,
                notes=request.moderator_notes,
                merged_into_tag_id=(
                    TagId(UUID(request.merged_into_tag_id))
                    if request.merged_into_tag_id
                    else None
                ),
            )
            return ResolveSuggestionResponse(
                suggestion=SuggestionInfo.from_suggestion(resolution.suggestion),
                tag=TagItem.from_tag(resolution.tag) if resolution.tag else None,
                notified=resolution.notification is not None,
            )
