"""Role checks shared by moderator-only use cases."""

from uuid import UUID

import logfire

from kopiena.domain.error import AuthorizationError, NotFoundError
from kopiena.domain.model import User
from kopiena.domain.service import UserService
from kopiena.domain.value import UserId


async def require_moderator(user_service: UserService, actor_id: str | None) -> User:
    """Load the acting user and check they may moderate the taxonomy.

    Args:
        user_service: User domain service
        actor_id: ID of the signed-in user, None for anonymous callers

    Returns:
        The acting moderator or admin

    Raises:
        AuthorizationError: If there is no signed-in user, the user no longer
            exists, or the user is neither moderator nor admin
    """
    if not actor_id:
        raise AuthorizationError("Moderator access required")

    try:
        user = await user_service.get_by_id(UserId(UUID(actor_id)))
    except NotFoundError:
        raise AuthorizationError("Moderator access required") from None

    if not user.is_moderator:
        logfire.warn(
            "Moderator action refused", user_id=actor_id, role=user.role.value
        )
        raise AuthorizationError("Moderator access required")
    return user
