"""List pending suggestions use case."""

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.application.usecase.authorization import require_moderator
from kopiena.domain.service import SuggestionService, UserService

from .common import SuggestionInfo


class SubmitterInfo(BaseModel):
    """Submitter of a suggestion."""

    id: str
    name: str | None
    email: str


class ParentTagInfo(BaseModel):
    """Proposed parent of a suggestion."""

    id: str
    name: str


class PendingSuggestionItem(SuggestionInfo):
    """Pending suggestion in the moderation queue."""

    suggested_by: SubmitterInfo | None
    parent_tags: list[ParentTagInfo]


class ListSuggestionsRequest(BaseModel):
    """List pending suggestions request."""

    actor_id: str | None  # Signed-in user, None if anonymous


class ListSuggestionsResponse(BaseModel):
    """List pending suggestions response."""

    suggestions: list[PendingSuggestionItem]


class ListSuggestionsUseCase(
    BaseUseCase[ListSuggestionsRequest, ListSuggestionsResponse]
):
    """Use case for the moderators' review queue."""

    def __init__(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> None:
        """Initialize list suggestions use case.

        Args:
            suggestion_service: Suggestion domain service
            user_service: User domain service
        """
        self.suggestion_service = suggestion_service
        self.user_service = user_service

    async def execute(self, request: ListSuggestionsRequest) -> ListSuggestionsResponse:
        """Execute list pending suggestions flow.

        Args:
            request: List suggestions request

        Returns:
            PENDING suggestions, oldest first

        Raises:
            AuthorizationError: If the caller is not a moderator
        """
        with logfire.span("list_suggestions.execute"):
            await require_moderator(self.user_service, request.actor_id)

            pending = await self.suggestion_service.list_pending()
            return ListSuggestionsResponse(
                suggestions=[
                    PendingSuggestionItem(
                        **SuggestionInfo.from_suggestion(item.suggestion).model_dump(),
                        suggested_by=(
                            SubmitterInfo(
                                id=str(item.submitter.id),
                                name=item.submitter.name,
                                email=item.submitter.email,
                            )
                            if item.submitter
                            else None
                        ),
                        parent_tags=[
                            ParentTagInfo(id=str(tag.id), name=tag.name)
                            for tag in item.parent_tags
                        ],
                    )
                    for item in pending
                ]
            )
