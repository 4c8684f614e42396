"""User aggregate root, limited to the fields the taxonomy needs."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from kopiena.domain.model.common import DomainModel
from kopiena.domain.value import UserId, UserRole


class User(DomainModel):
    """Platform user.

    ``pending_suggestion_count`` caches the number of the user's PENDING tag
    suggestions. It only changes together with a suggestion state change,
    inside the same atomic unit.
    """

    id: UserId
    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    pending_suggestion_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_moderator(self) -> bool:
        """Moderators and admins may review tag suggestions."""
        return self.role in (UserRole.MODERATOR, UserRole.ADMIN)
