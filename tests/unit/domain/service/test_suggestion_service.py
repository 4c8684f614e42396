"""Unit tests for SuggestionService."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from kopiena.domain.error import (
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    QuotaExceededError,
    StorageError,
    UnknownMergeTargetError,
    ValidationError,
)
from kopiena.domain.repository import (
    NotificationRepository,
    TagParentRepository,
    TagRepository,
    TagSuggestionRepository,
    UserRepository,
)
from kopiena.domain.service import SuggestionService
from kopiena.domain.value import (
    NotificationType,
    SuggestionAction,
    SuggestionStatus,
    TagId,
    TagLevel,
    TagSuggestionId,
    UserId,
    UserRole,
)
from tests.conftest import make_user, seed_taxonomy
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _setup(unit_env):
    """Seed the taxonomy, a submitter and a moderator."""
    user_repo = await unit_env.get(UserRepository)
    taxonomy = await seed_taxonomy(
        await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
    )
    submitter = await make_user(user_repo)
    moderator = await make_user(user_repo, role=UserRole.MODERATOR)
    return taxonomy, submitter, moderator


class TestCreate:
    """Tests for create method."""

    @pytest.mark.asyncio
    async def test_create_success(self, unit_env):
        """A valid suggestion should be PENDING and take one quota slot."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, _ = await _setup(unit_env)

        # Act
        suggestion = await service.create(
            submitter.id, "  Volleyball ", "Volejbols", [taxonomy.team_sports.id]
        )

        # Assert
        assert suggestion.status == SuggestionStatus.PENDING
        assert suggestion.name_en == "Volleyball"
        assert suggestion.level == TagLevel.INTEREST
        assert suggestion.parent_tag_ids == [taxonomy.team_sports.id]
        user = await user_repo.find_by_id(submitter.id)
        assert user.pending_suggestion_count == 1

    @pytest.mark.asyncio
    async def test_sixth_suggestion_exceeds_quota(self, unit_env):
        """Five pending suggestions are allowed, the sixth is refused."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        suggestion_repo = await unit_env.get(TagSuggestionRepository)
        taxonomy, submitter, _ = await _setup(unit_env)
        for i in range(5):
            await service.create(
                submitter.id, f"Sport {i}", f"Sports {i}", [taxonomy.team_sports.id]
            )

        # Act & Assert
        with pytest.raises(QuotaExceededError):
            await service.create(
                submitter.id, "Sport 5", "Sports 5", [taxonomy.team_sports.id]
            )
        assert await suggestion_repo.count_pending_by_user(submitter.id) == 5

    @pytest.mark.asyncio
    async def test_quota_checked_before_fields(self, unit_env):
        """A full quota should be reported even for an invalid request."""
        service = await unit_env.get(SuggestionService)
        user = await make_user(
            await unit_env.get(UserRepository), pending_suggestion_count=5
        )

        with pytest.raises(QuotaExceededError):
            await service.create(user.id, None, None, [])

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name_en,name_lv,with_parent",
        [("", "Volejbols", True), ("Volleyball", "   ", True), ("Volleyball", "Volejbols", False)],
    )
    async def test_missing_fields_rejected(self, unit_env, name_en, name_lv, with_parent):
        # Arrange
        service = await unit_env.get(SuggestionService)
        taxonomy, submitter, _ = await _setup(unit_env)
        parents = [taxonomy.team_sports.id] if with_parent else []

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create(submitter.id, name_en, name_lv, parents)

    @pytest.mark.asyncio
    async def test_existing_tag_name_rejected(self, unit_env):
        """Names clash with ACTIVE tags regardless of case."""
        service = await unit_env.get(SuggestionService)
        taxonomy, submitter, _ = await _setup(unit_env)

        with pytest.raises(DuplicateError, match="Basketball"):
            await service.create(
                submitter.id, "Hoops", "BASKETBALL", [taxonomy.team_sports.id]
            )

    @pytest.mark.asyncio
    async def test_pending_suggestion_name_rejected(self, unit_env):
        """A second user cannot suggest a name already awaiting review."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        taxonomy, submitter, _ = await _setup(unit_env)
        other = await make_user(await unit_env.get(UserRepository))
        await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )

        # Act & Assert
        with pytest.raises(DuplicateError, match="already pending"):
            await service.create(
                other.id, "volleyball", "Pludmales volejbols", [taxonomy.team_sports.id]
            )

    @pytest.mark.asyncio
    async def test_parent_must_be_level_two(self, unit_env):
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, _ = await _setup(unit_env)

        with pytest.raises(ValidationError, match="level 2"):
            await service.create(
                submitter.id, "Volleyball", "Volejbols", [taxonomy.movement.id]
            )
        with pytest.raises(ValidationError):
            await service.create(
                submitter.id, "Volleyball", "Volejbols", [TagId(uuid4())]
            )
        user = await user_repo.find_by_id(submitter.id)
        assert user.pending_suggestion_count == 0

    @pytest.mark.asyncio
    async def test_repeated_parent_rejected(self, unit_env):
        """The same domain listed twice should not be stored as two parents."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        suggestion_repo = await unit_env.get(TagSuggestionRepository)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, _ = await _setup(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError, match="must not repeat"):
            await service.create(
                submitter.id,
                "Netball",
                "Netbols",
                [taxonomy.team_sports.id, taxonomy.team_sports.id],
            )
        assert await suggestion_repo.find_by_status(SuggestionStatus.PENDING) == []
        user = await user_repo.find_by_id(submitter.id)
        assert user.pending_suggestion_count == 0

    @pytest.mark.asyncio
    async def test_unknown_user_rejected(self, unit_env):
        service = await unit_env.get(SuggestionService)

        with pytest.raises(NotFoundError):
            await service.create(UserId(uuid4()), "Volleyball", "Volejbols", [])


class TestApprove:
    """Tests for approving suggestions."""

    @pytest.mark.asyncio
    async def test_approve_creates_tag_and_notifies(self, unit_env):
        """Approval creates a level 3 tag under the first parent only."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        tag_repo = await unit_env.get(TagRepository)
        tag_parent_repo = await unit_env.get(TagParentRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id,
            "Volleyball",
            "Volejbols",
            [taxonomy.team_sports.id, taxonomy.woodworking.id],
        )

        # Act
        resolution = await service.resolve(
            suggestion.id, SuggestionAction.APPROVE, moderator.id, "Welcome"
        )

        # Assert
        tag = resolution.tag
        assert tag is not None
        assert tag.name == "Volleyball"
        assert tag.level == TagLevel.INTEREST
        assert tag.parent_id == taxonomy.team_sports.id
        assert await tag_repo.find_by_id(tag.id) == tag

        links = await tag_parent_repo.find_by_tag_ids([tag.id])
        assert len(links) == 1
        assert links[0].is_primary
        assert links[0].parent_id == taxonomy.team_sports.id
        assert links[0].l1_category == "Movement & Wellness"
        assert links[0].l1_color_key == "categoryGreen"

        assert resolution.suggestion.status == SuggestionStatus.APPROVED
        assert resolution.suggestion.moderated_by_id == moderator.id
        assert resolution.suggestion.moderated_at is not None
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 0

        notifications = await notification_repo.find_by_user(submitter.id)
        assert len(notifications) == 1
        assert notifications[0].type == NotificationType.TAG_SUGGESTION_APPROVED
        assert notifications[0].title == "Tag Suggestion Approved"
        assert resolution.notification == notifications[0]

    @pytest.mark.asyncio
    async def test_second_resolution_rejected(self, unit_env):
        """A resolved suggestion can never be resolved again."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        tag_repo = await unit_env.get(TagRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )
        await service.approve(suggestion.id, moderator.id)
        tags_before = len(await tag_repo.find_all())

        # Act & Assert
        with pytest.raises(InvalidStateError, match="already been approved"):
            await service.approve(suggestion.id, moderator.id)
        with pytest.raises(InvalidStateError):
            await service.deny(suggestion.id, moderator.id)
        assert len(await tag_repo.find_all()) == tags_before
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 0

    @pytest.mark.asyncio
    async def test_failure_inside_unit_changes_nothing(self, unit_env):
        """If the counter update fails, the tag and status change are undone."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        tag_repo = await unit_env.get(TagRepository)
        suggestion_repo = await unit_env.get(TagSuggestionRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )

        # Act
        with patch.object(
            user_repo,
            "decrement_pending_suggestions",
            new_callable=AsyncMock,
            side_effect=StorageError("connection lost"),
        ):
            with pytest.raises(StorageError):
                await service.approve(suggestion.id, moderator.id)

        # Assert
        assert await tag_repo.find_by_names_insensitive(["Volleyball"]) == []
        stored = await suggestion_repo.find_by_id(suggestion.id)
        assert stored.status == SuggestionStatus.PENDING
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 1
        assert await notification_repo.find_by_user(submitter.id) == []

    @pytest.mark.asyncio
    async def test_notification_failure_keeps_approval(self, unit_env):
        """Notifications are best-effort and never undo the resolution."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        notification_repo = await unit_env.get(NotificationRepository)
        suggestion_repo = await unit_env.get(TagSuggestionRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )

        # Act
        with patch.object(
            notification_repo,
            "save",
            new_callable=AsyncMock,
            side_effect=StorageError("notifications table locked"),
        ):
            resolution = await service.approve(suggestion.id, moderator.id)

        # Assert
        assert resolution.notification is None
        assert resolution.tag is not None
        stored = await suggestion_repo.find_by_id(suggestion.id)
        assert stored.status == SuggestionStatus.APPROVED

    @pytest.mark.asyncio
    async def test_unknown_suggestion(self, unit_env):
        service = await unit_env.get(SuggestionService)

        with pytest.raises(NotFoundError):
            await service.approve(TagSuggestionId(uuid4()), UserId(uuid4()))


class TestDeny:
    """Tests for denying suggestions."""

    @pytest.mark.asyncio
    async def test_deny_includes_reason(self, unit_env):
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        tag_repo = await unit_env.get(TagRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )
        tags_before = len(await tag_repo.find_all())

        # Act
        resolution = await service.resolve(
            suggestion.id, SuggestionAction.DENY, moderator.id, "Too specific"
        )

        # Assert
        assert resolution.suggestion.status == SuggestionStatus.DENIED
        assert resolution.suggestion.moderator_notes == "Too specific"
        assert resolution.tag is None
        assert len(await tag_repo.find_all()) == tags_before
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 0
        assert resolution.notification.message == (
            'Your suggestion "Volleyball" was not approved. Reason: Too specific'
        )

    @pytest.mark.asyncio
    async def test_denied_name_can_be_suggested_again(self, unit_env):
        """Only PENDING suggestions block a name."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )
        await service.deny(suggestion.id, moderator.id)

        # Act
        again = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )

        # Assert
        assert again.status == SuggestionStatus.PENDING


class TestMerge:
    """Tests for merging suggestions."""

    @pytest.mark.asyncio
    async def test_merge_points_at_existing_tag(self, unit_env):
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Hoops", "Strītbols", [taxonomy.team_sports.id]
        )

        # Act
        resolution = await service.resolve(
            suggestion.id,
            SuggestionAction.MERGE,
            moderator.id,
            merged_into_tag_id=taxonomy.basketball.id,
        )

        # Assert
        assert resolution.suggestion.status == SuggestionStatus.MERGED
        assert resolution.suggestion.merged_into_tag_id == taxonomy.basketball.id
        assert resolution.tag is None
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 0
        assert resolution.notification.type == NotificationType.TAG_SUGGESTION_MERGED
        assert resolution.notification.message == (
            'Your suggestion "Hoops" was merged with existing tag "Basketball".'
        )

    @pytest.mark.asyncio
    async def test_merge_without_target(self, unit_env):
        service = await unit_env.get(SuggestionService)
        suggestion_repo = await unit_env.get(TagSuggestionRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Hoops", "Strītbols", [taxonomy.team_sports.id]
        )

        with pytest.raises(ValidationError, match="required"):
            await service.merge(suggestion.id, moderator.id, None)
        stored = await suggestion_repo.find_by_id(suggestion.id)
        assert stored.status == SuggestionStatus.PENDING

    @pytest.mark.asyncio
    async def test_merge_into_unknown_tag(self, unit_env):
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, moderator = await _setup(unit_env)
        suggestion = await service.create(
            submitter.id, "Hoops", "Strītbols", [taxonomy.team_sports.id]
        )

        with pytest.raises(UnknownMergeTargetError):
            await service.merge(suggestion.id, moderator.id, TagId(uuid4()))
        assert (await user_repo.find_by_id(submitter.id)).pending_suggestion_count == 1


class TestListPending:
    """Tests for list_pending method."""

    @pytest.mark.asyncio
    async def test_oldest_first_with_details(self, unit_env):
        # Arrange
        service = await unit_env.get(SuggestionService)
        taxonomy, submitter, moderator = await _setup(unit_env)
        first = await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )
        second = await service.create(
            submitter.id, "Whittling", "Kokgriešana", [taxonomy.woodworking.id]
        )
        resolved = await service.create(
            submitter.id, "Hoops", "Strītbols", [taxonomy.team_sports.id]
        )
        await service.deny(resolved.id, moderator.id)

        # Act
        pending = await service.list_pending()

        # Assert
        assert [item.suggestion.id for item in pending] == [first.id, second.id]
        assert pending[0].submitter.id == submitter.id
        assert [tag.name for tag in pending[1].parent_tags] == ["Woodworking"]


class TestPendingCount:
    """Tests for get_pending_count and reconcile_pending_count."""

    @pytest.mark.asyncio
    async def test_unknown_user_has_zero(self, unit_env):
        service = await unit_env.get(SuggestionService)

        assert await service.get_pending_count(UserId(uuid4())) == 0

    @pytest.mark.asyncio
    async def test_reconcile_repairs_drift(self, unit_env):
        """The cached counter is overwritten with the real PENDING count."""
        # Arrange
        service = await unit_env.get(SuggestionService)
        user_repo = await unit_env.get(UserRepository)
        taxonomy, submitter, _ = await _setup(unit_env)
        await service.create(
            submitter.id, "Volleyball", "Volejbols", [taxonomy.team_sports.id]
        )
        await user_repo.set_pending_suggestions(submitter.id, 4)

        # Act
        count = await service.reconcile_pending_count(submitter.id)

        # Assert
        assert count == 1
        assert await service.get_pending_count(submitter.id) == 1

    @pytest.mark.asyncio
    async def test_reconcile_unknown_user(self, unit_env):
        service = await unit_env.get(SuggestionService)

        with pytest.raises(NotFoundError):
            await service.reconcile_pending_count(UserId(uuid4()))
