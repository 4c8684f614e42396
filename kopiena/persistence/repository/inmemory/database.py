"""Shared state for the in-memory repositories."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from kopiena.domain.model import Notification, Tag, TagParent, TagSuggestion, User
from kopiena.domain.value import NotificationId, TagId, TagParentId, TagSuggestionId, UserId


class InMemoryDatabase:
    """Tables of an in-memory store, shared by every in-memory repository.

    ``group_tags`` and ``event_tags`` hold ``(group_id, tag_id)`` and
    ``(event_id, tag_id)`` pairs so tests can seed tag usage.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.tags: dict[TagId, Tag] = {}
        self.tag_parents: dict[TagParentId, TagParent] = {}
        self.tag_suggestions: dict[TagSuggestionId, TagSuggestion] = {}
        self.notifications: dict[NotificationId, Notification] = {}
        self.group_tags: set[tuple[object, TagId]] = set()
        self.event_tags: set[tuple[object, TagId]] = set()

    def _snapshot(self) -> dict[str, object]:
        # Entities are frozen, so copying the containers is enough
        return {name: value.copy() for name, value in vars(self).items()}

    def _restore(self, snapshot: dict[str, object]) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Undo every change made inside the block if it raises."""
        snapshot = self._snapshot()
        try:
            yield
        except BaseException:
            self._restore(snapshot)
            raise
