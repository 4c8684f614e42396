"""Test configuration and helpers for seeding the taxonomy."""

from dataclasses import dataclass
from uuid import uuid4

from kopiena.domain.model import Tag, TagParent, User
from kopiena.domain.repository import TagParentRepository, TagRepository, UserRepository
from kopiena.domain.value import TagId, TagLevel, TagParentId, UserId, UserRole


async def make_user(
    user_repo: UserRepository,
    role: UserRole = UserRole.USER,
    pending_suggestion_count: int = 0,
    email: str | None = None,
) -> User:
    """Helper to create a test user."""
    user_id = UserId(uuid4())
    user = User(
        id=user_id,
        email=email or f"user-{str(user_id)[:8]}@example.com",
        name="Test User",
        role=role,
        pending_suggestion_count=pending_suggestion_count,
    )
    return await user_repo.save(user)


async def make_tag(
    tag_repo: TagRepository,
    tag_parent_repo: TagParentRepository,
    name: str,
    parent: Tag | None = None,
    color_key: str | None = None,
    category: Tag | None = None,
) -> Tag:
    """Helper to create a tag, wired to its parent with a primary link.

    Args:
        tag_repo: Tag repository
        tag_parent_repo: Tag parent repository
        name: Tag name
        parent: Parent tag, None for a level 1 category
        color_key: Style key, normally only on categories
        category: Level 1 ancestor copied onto the link
    """
    level = TagLevel(parent.level + 1) if parent else TagLevel.CATEGORY
    tag = await tag_repo.save(
        Tag(
            id=TagId(uuid4()),
            name=name,
            level=level,
            parent_id=parent.id if parent else None,
            color_key=color_key,
        )
    )
    if parent:
        l1 = category or parent
        await tag_parent_repo.save(
            TagParent(
                id=TagParentId(uuid4()),
                tag_id=tag.id,
                parent_id=parent.id,
                is_primary=True,
                l1_category=l1.name,
                l1_color_key=l1.color_key,
            )
        )
    return tag


@dataclass
class Taxonomy:
    """Small seeded taxonomy shared by the tests."""

    movement: Tag  # Level 1
    skill: Tag  # Level 1
    team_sports: Tag  # Level 2 under movement
    woodworking: Tag  # Level 2 under skill
    basketball: Tag  # Level 3 under team_sports
    baseball: Tag  # Level 3 under team_sports
    carving: Tag  # Level 3 under woodworking


async def seed_taxonomy(
    tag_repo: TagRepository, tag_parent_repo: TagParentRepository
) -> Taxonomy:
    """Seed two categories, two domains and three interests."""
    movement = await make_tag(
        tag_repo, tag_parent_repo, "Movement & Wellness", color_key="categoryGreen"
    )
    skill = await make_tag(
        tag_repo, tag_parent_repo, "Skill & Craft", color_key="categoryTeal"
    )
    team_sports = await make_tag(tag_repo, tag_parent_repo, "Team Sports", movement)
    woodworking = await make_tag(tag_repo, tag_parent_repo, "Woodworking", skill)
    basketball = await make_tag(
        tag_repo, tag_parent_repo, "Basketball", team_sports, category=movement
    )
    baseball = await make_tag(
        tag_repo, tag_parent_repo, "Baseball", team_sports, category=movement
    )
    carving = await make_tag(
        tag_repo, tag_parent_repo, "Carving", woodworking, category=skill
    )
    return Taxonomy(
        movement=movement,
        skill=skill,
        team_sports=team_sports,
        woodworking=woodworking,
        basketball=basketball,
        baseball=baseball,
        carving=carving,
    )
