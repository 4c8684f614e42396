"""Unit tests for tag use cases."""

from uuid import uuid4

import pytest

from kopiena.application.usecase.base import BaseUseCase
from kopiena.application.usecase.tag import (
    AssignTagParentRequest,
    AssignTagParentUseCase,
    GetTagTreeUseCase,
    ListTagsRequest,
    ListTagsUseCase,
    SearchTagsRequest,
    SearchTagsUseCase,
)
from kopiena.domain.error import AuthorizationError, ValidationError
from kopiena.domain.repository import TagParentRepository, TagRepository, UserRepository
from kopiena.domain.value import UserRole
from tests.conftest import make_user, seed_taxonomy
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListTagsUseCase:
    """Tests for ListTagsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_children_of_parent(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListTagsUseCase)
        taxonomy = await seed_taxonomy(
            await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
        )

        # Act
        response = await use_case.execute(
            ListTagsRequest(parent_id=str(taxonomy.movement.id))
        )

        # Assert
        assert [tag.name for tag in response.tags] == ["Team Sports"]
        assert response.tags[0].level == 2
        assert response.tags[0].parent_id == str(taxonomy.movement.id)


class TestSearchTagsUseCase:
    """Tests for SearchTagsUseCase."""

    @pytest.mark.asyncio
    async def test_response_shape(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SearchTagsUseCase)
        taxonomy = await seed_taxonomy(
            await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
        )

        # Act
        response = await use_case.execute(SearchTagsRequest(query="basketball"))

        # Assert
        top = response.tags[0]
        assert top.id == str(taxonomy.basketball.id)
        assert top.hierarchy.l1.name == "Movement & Wellness"
        assert top.hierarchy.l2.id == str(taxonomy.team_sports.id)
        assert top.hierarchy.path == "Movement & Wellness > Team Sports > Basketball"
        assert response.total >= 1

    @pytest.mark.asyncio
    async def test_short_query(self, unit_env):
        use_case = await unit_env.get(SearchTagsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(SearchTagsRequest(query="a"))


class TestGetTagTreeUseCase:
    """Tests for GetTagTreeUseCase."""

    @pytest.mark.asyncio
    async def test_tree_shape(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetTagTreeUseCase)
        await seed_taxonomy(
            await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
        )

        # Act
        response = await use_case.execute()

        # Assert
        assert [node.name for node in response.tree] == [
            "Movement & Wellness",
            "Skill & Craft",
        ]
        team_sports = response.tree[0].children[0]
        assert [node.name for node in team_sports.children] == ["Baseball", "Basketball"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "use_case_type",
    [AssignTagParentUseCase, GetTagTreeUseCase, ListTagsUseCase, SearchTagsUseCase],
)
async def test_container_provides_base_use_cases(unit_env, use_case_type):
    use_case = await unit_env.get(use_case_type)

    assert isinstance(use_case, BaseUseCase)


class TestAssignTagParentUseCase:
    """Tests for AssignTagParentUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_can_assign(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AssignTagParentUseCase)
        moderator = await make_user(
            await unit_env.get(UserRepository), role=UserRole.ADMIN
        )
        taxonomy = await seed_taxonomy(
            await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
        )

        # Act
        response = await use_case.execute(
            AssignTagParentRequest(
                actor_id=str(moderator.id),
                tag_id=str(taxonomy.carving.id),
                parent_id=str(taxonomy.team_sports.id),
            )
        )

        # Assert
        assert response.is_primary is False
        assert response.l1_category == "Movement & Wellness"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("actor", ["anonymous", "user", "unknown"])
    async def test_non_moderators_refused(self, unit_env, actor):
        # Arrange
        use_case = await unit_env.get(AssignTagParentUseCase)
        user = await make_user(await unit_env.get(UserRepository))
        taxonomy = await seed_taxonomy(
            await unit_env.get(TagRepository), await unit_env.get(TagParentRepository)
        )
        actor_id = {
            "anonymous": None,
            "user": str(user.id),
            "unknown": str(uuid4()),
        }[actor]

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await use_case.execute(
                AssignTagParentRequest(
                    actor_id=actor_id,
                    tag_id=str(taxonomy.carving.id),
                    parent_id=str(taxonomy.team_sports.id),
                )
            )
