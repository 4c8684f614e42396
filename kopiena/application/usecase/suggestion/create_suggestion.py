"""Create tag suggestion use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.domain.error import AuthenticationError
from kopiena.domain.service import SuggestionService
from kopiena.domain.value import TagId, UserId

from .common import SuggestionInfo


class CreateSuggestionRequest(BaseModel):
    """Create suggestion request."""

    user_id: str | None  # Submitter from the session, None if anonymous
    name_en: str | None = None
    name_lv: str | None = None
    parent_tag_ids: list[str] = []  # UUID strings, primary parent first


class CreateSuggestionResponse(BaseModel):
    """Create suggestion response."""

    suggestion: SuggestionInfo
    message: str


class CreateSuggestionUseCase(
    BaseUseCase[CreateSuggestionRequest, CreateSuggestionResponse]
):
    """Use case for proposing a new level 3 tag."""

    def __init__(self, suggestion_service: SuggestionService) -> None:
        """Initialize create suggestion use case.

        Args:
            suggestion_service: Suggestion domain service
        """
        self.suggestion_service = suggestion_service

    async def execute(
        self, request: CreateSuggestionRequest
    ) -> CreateSuggestionResponse:
        """Execute create suggestion flow.

        Args:
            request: Create suggestion request

        Returns:
            The created PENDING suggestion

        Raises:
            AuthenticationError: If nobody is signed in
            QuotaExceededError: If the submitter has too many pending suggestions
            ValidationError: If a field is missing or a parent is invalid
            DuplicateError: If the name is taken
        """
        if not request.user_id:
            raise AuthenticationError("Sign in to suggest a tag")

        with logfire.span("create_suggestion.execute", user_id=request.user_id):
            suggestion = await self.suggestion_service.create(
                user_id=UserId(UUID(request.user_id)),
                name_en=request.name_en,
                name_lv=request.name_lv,
                parent_tag_ids=[TagId(UUID(value)) for value in request.parent_tag_ids],
            )
            return CreateSuggestionResponse(
                suggestion=SuggestionInfo.from_suggestion(suggestion),
                message="Tag suggestion submitted for review",
            )
