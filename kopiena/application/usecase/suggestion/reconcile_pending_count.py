"""Reconcile pending suggestion count use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.application.usecase.authorization import require_moderator
from kopiena.domain.service import SuggestionService, UserService
from kopiena.domain.value import UserId


class ReconcilePendingCountRequest(BaseModel):
    """Reconcile pending count request."""

    actor_id: str | None  # Signed-in user, None if anonymous
    user_id: str  # User whose counter is repaired


class ReconcilePendingCountResponse(BaseModel):
    """Reconcile pending count response."""

    user_id: str
    count: int


class ReconcilePendingCountUseCase(
    BaseUseCase[ReconcilePendingCountRequest, ReconcilePendingCountResponse]
):
    """Use case for repairing a drifted pending suggestion counter."""

    def __init__(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> None:
        """Initialize reconcile pending count use case.

        Args:
            suggestion_service: Suggestion domain service
            user_service: User domain service
        """
        self.suggestion_service = suggestion_service
        self.user_service = user_service

    async def execute(
        self, request: ReconcilePendingCountRequest
    ) -> ReconcilePendingCountResponse:
        """Execute reconcile flow.

        Args:
            request: Reconcile request

        Returns:
            The recounted value

        Raises:
            AuthorizationError: If the caller is not a moderator
            NotFoundError: If the user does not exist
        """
        with logfire.span("reconcile_pending_count.execute", user_id=request.user_id):
            await require_moderator(self.user_service, request.actor_id)

            count = await self.suggestion_service.reconcile_pending_count(
                UserId(UUID(request.user_id))
            )
            return ReconcilePendingCountResponse(user_id=request.user_id, count=count)
