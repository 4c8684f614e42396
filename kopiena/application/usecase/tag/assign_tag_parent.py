"""Assign tag parent use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from kopiena.application.usecase.base import BaseUseCase
from kopiena.application.usecase.authorization import require_moderator
from kopiena.domain.service import TagService, UserService
from kopiena.domain.value import TagId


class AssignTagParentRequest(BaseModel):
    """Assign tag parent request."""

    actor_id: str | None  # Signed-in user, None if anonymous
    tag_id: str
    parent_id: str
    is_primary: bool = False


class AssignTagParentResponse(BaseModel):
    """Assign tag parent response."""

    id: str
    tag_id: str
    parent_id: str
    is_primary: bool
    l1_category: str | None
    l1_color_key: str | None
    created_at: datetime


class AssignTagParentUseCase(
    BaseUseCase[AssignTagParentRequest, AssignTagParentResponse]
):
    """Use case for adding a secondary (or new primary) parent to a tag."""

    def __init__(self, tag_service: TagService, user_service: UserService) -> None:
        """Initialize assign tag parent use case.

        Args:
            tag_service: Tag domain service
            user_service: User domain service
        """
        self.tag_service = tag_service
        self.user_service = user_service

    async def execute(self, request: AssignTagParentRequest) -> AssignTagParentResponse:
        """Execute assign parent flow.

        Steps:
        1. Check the caller is a moderator
        2. Link the tag to the parent via tag service

        Args:
            request: Assign tag parent request

        Returns:
            The created link

        Raises:
            AuthorizationError: If the caller is not a moderator
            NotFoundError: If either tag does not exist
            ValidationError: If the parent is on the wrong level
            DuplicateError: If the link already exists
        """
        with logfire.span(
            "assign_tag_parent.execute",
            tag_id=request.tag_id,
            parent_id=request.parent_id,
        ):
            await require_moderator(self.user_service, request.actor_id)

            link = await self.tag_service.assign_parent(
                TagId(UUID(request.tag_id)),
                TagId(UUID(request.parent_id)),
                is_primary=request.is_primary,
            )
            return AssignTagParentResponse(
                id=str(link.id),
                tag_id=str(link.tag_id),
                parent_id=str(link.parent_id),
                is_primary=link.is_primary,
                l1_category=link.l1_category,
                l1_color_key=link.l1_color_key,
                created_at=link.created_at,
            )
