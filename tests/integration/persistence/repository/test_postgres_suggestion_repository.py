"""Integration tests for PostgresTagSuggestionRepository.

These tests verify the compare-and-set resolution and the savepoint that
keeps a suggestion insert and the quota increment together.
"""

from uuid import uuid4

import pytest

from kopiena.domain.error import QuotaExceededError
from kopiena.domain.model import TagSuggestion
from kopiena.domain.repository import (
    TagParentRepository,
    TagRepository,
    TagSuggestionRepository,
    UnitOfWork,
    UserRepository,
)
from kopiena.domain.value import SuggestionStatus, TagSuggestionId
from tests.conftest import make_tag, make_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _suggestion(integration_env, pending_suggestion_count: int = 0):
    """Build an unsaved suggestion under freshly created tags."""
    user_repo = await integration_env.get(UserRepository)
    tag_repo = await integration_env.get(TagRepository)
    tag_parent_repo = await integration_env.get(TagParentRepository)

    # Names stay unique across runs against the same database
    run = uuid4().hex[:8]
    category = await make_tag(
        tag_repo, tag_parent_repo, f"Category {run}", color_key="categoryGreen"
    )
    domain = await make_tag(tag_repo, tag_parent_repo, f"Domain {run}", category)
    user = await make_user(user_repo, pending_suggestion_count=pending_suggestion_count)

    suggestion = TagSuggestion(
        id=TagSuggestionId(uuid4()),
        name_en=f"Interest {run}",
        name_lv=f"Interese {run}",
        parent_tag_ids=[domain.id],
        suggested_by_id=user.id,
    )
    return suggestion, user


class TestSaveResolutionIntegration:
    """Integration tests for save_resolution."""

    @pytest.mark.asyncio
    async def test_first_resolution_wins(self, integration_env):
        # Arrange
        suggestion_repo = await integration_env.get(TagSuggestionRepository)
        suggestion, user = await _suggestion(integration_env)
        await suggestion_repo.save(suggestion)
        approved = suggestion.resolve(SuggestionStatus.APPROVED, user.id)
        denied = suggestion.resolve(SuggestionStatus.DENIED, user.id, "Too narrow")

        # Act
        first = await suggestion_repo.save_resolution(approved)
        second = await suggestion_repo.save_resolution(denied)

        # Assert
        assert first is True
        assert second is False
        stored = await suggestion_repo.find_by_id(suggestion.id)
        assert stored.status == SuggestionStatus.APPROVED
        assert stored.moderator_notes is None


class TestAtomicInsertIntegration:
    """Integration tests for PostgresUnitOfWork around the suggestion insert."""

    @pytest.mark.asyncio
    async def test_refused_increment_rolls_back_insert(self, integration_env):
        """An insert whose quota increment fails does not survive."""
        # Arrange
        unit_of_work = await integration_env.get(UnitOfWork)
        suggestion_repo = await integration_env.get(TagSuggestionRepository)
        user_repo = await integration_env.get(UserRepository)
        suggestion, user = await _suggestion(integration_env, pending_suggestion_count=5)

        # Act
        with pytest.raises(QuotaExceededError):
            async with unit_of_work.atomic():
                await suggestion_repo.save(suggestion)
                if not await user_repo.increment_pending_suggestions(user.id, 5):
                    raise QuotaExceededError(5)

        # Assert
        assert await suggestion_repo.find_by_id(suggestion.id) is None
        assert await suggestion_repo.count_pending_by_user(user.id) == 0
        stored = await user_repo.find_by_id(user.id)
        assert stored.pending_suggestion_count == 5

    @pytest.mark.asyncio
    async def test_successful_block_keeps_insert(self, integration_env):
        # Arrange
        unit_of_work = await integration_env.get(UnitOfWork)
        suggestion_repo = await integration_env.get(TagSuggestionRepository)
        user_repo = await integration_env.get(UserRepository)
        suggestion, user = await _suggestion(integration_env)

        # Act
        async with unit_of_work.atomic():
            await suggestion_repo.save(suggestion)
            incremented = await user_repo.increment_pending_suggestions(user.id, 5)

        # Assert
        assert incremented is True
        assert await suggestion_repo.count_pending_by_user(user.id) == 1
        stored = await user_repo.find_by_id(user.id)
        assert stored.pending_suggestion_count == 1
