"""End-to-end tests for the taxonomy API."""

from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from kopiena.config import Settings
from kopiena.domain.value import UserRole
from kopiena.interface.api.app import create_app
from kopiena.persistence.repository.inmemory import (
    InMemoryDatabase,
    InMemoryTagParentRepository,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from kopiena.util.di.container import setup_di
from kopiena.util.jwt import create_token
from tests.conftest import make_user, seed_taxonomy
from tests.di import build_test_container


@pytest_asyncio.fixture
async def api():
    """App wired to an in-memory container, plus handles for seeding."""
    app_instance = create_app()
    container = build_test_container()
    setup_di(app_instance, container)

    database = await container.get(InMemoryDatabase)
    taxonomy = await seed_taxonomy(
        InMemoryTagRepository(database), InMemoryTagParentRepository(database)
    )
    user_repo = InMemoryUserRepository(database)
    submitter = await make_user(user_repo)
    moderator = await make_user(user_repo, role=UserRole.MODERATOR)

    transport = httpx.ASGITransport(app=app_instance)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield {
            "client": client,
            "database": database,
            "taxonomy": taxonomy,
            "submitter": submitter,
            "moderator": moderator,
        }

    await container.close()


def _auth(user) -> dict[str, str]:
    token = create_token(str(user.id), user.email, Settings().auth)
    return {"Cookie": f"auth_token={token}"}


async def _suggest(api, name_en="Volleyball", user=None):
    return await api["client"].post(
        "/tags/suggest",
        json={
            "name_en": name_en,
            "name_lv": f"{name_en} LV",
            "parent_tag_ids": [str(api["taxonomy"].team_sports.id)],
        },
        headers=_auth(user or api["submitter"]),
    )


class TestBrowsing:
    """Tests for public tag endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, api):
        response = await api["client"].get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_list_tags_by_level(self, api):
        response = await api["client"].get("/tags", params={"level": 1})

        assert response.status_code == 200
        names = [tag["name"] for tag in response.json()["tags"]]
        assert names == ["Movement & Wellness", "Skill & Craft"]

    @pytest.mark.asyncio
    async def test_list_tags_invalid_level(self, api):
        response = await api["client"].get("/tags", params={"level": 7})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_search(self, api):
        # Act
        response = await api["client"].get("/tags/search", params={"q": "basket"})

        # Assert
        assert response.status_code == 200
        top = response.json()["tags"][0]
        assert top["name"] == "Basketball"
        assert top["hierarchy"]["path"] == (
            "Movement & Wellness > Team Sports > Basketball"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{}, {"q": "b"}])
    async def test_search_short_query(self, api, params):
        response = await api["client"].get("/tags/search", params=params)

        assert response.status_code == 400
        assert "at least 2 characters" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_tree(self, api):
        response = await api["client"].get("/tags/tree")

        assert response.status_code == 200
        tree = response.json()["tree"]
        assert [node["name"] for node in tree] == ["Movement & Wellness", "Skill & Craft"]
        assert tree[0]["children"][0]["name"] == "Team Sports"


class TestSuggestions:
    """Tests for suggestion submission endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_count(self, api):
        # Act
        created = await _suggest(api)
        count = await api["client"].get(
            "/tags/suggest/count", headers=_auth(api["submitter"])
        )

        # Assert
        assert created.status_code == 201
        assert created.json()["suggestion"]["status"] == "PENDING"
        assert count.json() == {"count": 1, "limit": 5}

    @pytest.mark.asyncio
    async def test_anonymous_count_is_zero(self, api):
        response = await api["client"].get("/tags/suggest/count")

        assert response.status_code == 200
        assert response.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_anonymous_create_unauthorized(self, api):
        response = await api["client"].post(
            "/tags/suggest",
            json={
                "name_en": "Volleyball",
                "name_lv": "Volejbols",
                "parent_tag_ids": [str(api["taxonomy"].team_sports.id)],
            },
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_duplicate_conflict(self, api):
        response = await _suggest(api, name_en="Basketball")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_quota_exceeded(self, api):
        # Arrange
        for i in range(5):
            assert (await _suggest(api, name_en=f"Sport {i}")).status_code == 201

        # Act
        response = await _suggest(api, name_en="Sport 5")

        # Assert
        assert response.status_code == 429

    @pytest.mark.asyncio
    async def test_missing_names_bad_request(self, api):
        response = await api["client"].post(
            "/tags/suggest",
            json={"parent_tag_ids": [str(api["taxonomy"].team_sports.id)]},
            headers=_auth(api["submitter"]),
        )

        assert response.status_code == 400


class TestModeration:
    """Tests for moderator endpoints."""

    @pytest.mark.asyncio
    async def test_queue_requires_moderator(self, api):
        anonymous = await api["client"].get("/admin/tag-suggestions")
        regular = await api["client"].get(
            "/admin/tag-suggestions", headers=_auth(api["submitter"])
        )

        assert anonymous.status_code == 403
        assert regular.status_code == 403

    @pytest.mark.asyncio
    async def test_approve_flow(self, api):
        # Arrange
        suggestion_id = (await _suggest(api)).json()["suggestion"]["id"]
        moderator = _auth(api["moderator"])

        # Act
        queue = await api["client"].get("/admin/tag-suggestions", headers=moderator)
        approved = await api["client"].patch(
            f"/admin/tag-suggestions/{suggestion_id}",
            json={"action": "approve"},
            headers=moderator,
        )
        again = await api["client"].patch(
            f"/admin/tag-suggestions/{suggestion_id}",
            json={"action": "deny"},
            headers=moderator,
        )
        search = await api["client"].get("/tags/search", params={"q": "volleyball"})

        # Assert
        assert [item["id"] for item in queue.json()["suggestions"]] == [suggestion_id]
        assert approved.status_code == 200
        assert approved.json()["tag"]["name"] == "Volleyball"
        assert again.status_code == 400
        hit = search.json()["tags"][0]
        assert hit["hierarchy"]["path"] == (
            "Movement & Wellness > Team Sports > Volleyball"
        )

    @pytest.mark.asyncio
    async def test_merge_errors(self, api):
        # Arrange
        suggestion_id = (await _suggest(api, name_en="Hoops")).json()["suggestion"]["id"]
        moderator = _auth(api["moderator"])

        # Act
        missing_target = await api["client"].patch(
            f"/admin/tag-suggestions/{suggestion_id}",
            json={"action": "merge"},
            headers=moderator,
        )
        unknown_target = await api["client"].patch(
            f"/admin/tag-suggestions/{suggestion_id}",
            json={"action": "merge", "merged_into_tag_id": str(uuid4())},
            headers=moderator,
        )

        # Assert
        assert missing_target.status_code == 400
        assert unknown_target.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_suggestion(self, api):
        response = await api["client"].patch(
            f"/admin/tag-suggestions/{uuid4()}",
            json={"action": "deny"},
            headers=_auth(api["moderator"]),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_assign_parent(self, api):
        # Arrange
        taxonomy = api["taxonomy"]

        # Act
        created = await api["client"].post(
            f"/admin/tags/{taxonomy.carving.id}/parents",
            json={"parent_id": str(taxonomy.team_sports.id)},
            headers=_auth(api["moderator"]),
        )
        duplicate = await api["client"].post(
            f"/admin/tags/{taxonomy.carving.id}/parents",
            json={"parent_id": str(taxonomy.team_sports.id)},
            headers=_auth(api["moderator"]),
        )

        # Assert
        assert created.status_code == 201
        assert created.json()["is_primary"] is False
        assert duplicate.status_code == 409

    @pytest.mark.asyncio
    async def test_reconcile(self, api):
        submitter = api["submitter"]
        await _suggest(api)

        response = await api["client"].post(
            f"/admin/users/{submitter.id}/pending-suggestions/reconcile",
            headers=_auth(api["moderator"]),
        )

        assert response.status_code == 200
        assert response.json() == {"user_id": str(submitter.id), "count": 1}


class TestAuth:
    """Tests for /auth/me."""

    @pytest.mark.asyncio
    async def test_me(self, api):
        anonymous = await api["client"].get("/auth/me")
        signed_in = await api["client"].get(
            "/auth/me", headers=_auth(api["moderator"])
        )

        assert anonymous.json() == {"authenticated": False, "user": None}
        body = signed_in.json()
        assert body["authenticated"] is True
        assert body["user"]["role"] == "MODERATOR"
