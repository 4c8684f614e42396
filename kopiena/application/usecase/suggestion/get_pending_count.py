"""Get pending suggestion count use case."""

from uuid import UUID

from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.config import TaxonomySettings
from kopiena.domain.service import SuggestionService
from kopiena.domain.value import UserId


class GetPendingCountRequest(BaseModel):
    """Get pending count request."""

    user_id: str | None  # None for anonymous callers


class GetPendingCountResponse(BaseModel):
    """Get pending count response."""

    count: int
    limit: int


class GetPendingCountUseCase(
    BaseUseCase[GetPendingCountRequest, GetPendingCountResponse]
):
    """Use case for showing a user how many suggestion slots they have used."""

    def __init__(
        self,
        suggestion_service: SuggestionService,
        taxonomy_settings: TaxonomySettings,
    ) -> None:
        """Initialize get pending count use case.

        Args:
            suggestion_service: Suggestion domain service
            taxonomy_settings: Quota configuration
        """
        self.suggestion_service = suggestion_service
        self.taxonomy_settings = taxonomy_settings

    async def execute(self, request: GetPendingCountRequest) -> GetPendingCountResponse:
        """Execute get pending count flow.

        Anonymous callers get a count of 0 rather than an error.

        Args:
            request: Get pending count request

        Returns:
            The caller's pending count and the quota
        """
        limit = self.taxonomy_settings.max_pending_suggestions
        if not request.user_id:
            return GetPendingCountResponse(count=0, limit=limit)

        count = await self.suggestion_service.get_pending_count(
            UserId(UUID(request.user_id))
        )
        return GetPendingCountResponse(count=count, limit=limit)
