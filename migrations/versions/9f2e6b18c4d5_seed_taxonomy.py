"""seed_taxonomy

Seed the six level 1 categories and a starter set of domains and interests.
Every level 2 and level 3 tag gets a primary tag_parents link.

Revision ID: 9f2e6b18c4d5
Revises: 3c41d7a9e2b0
Create Date: 2026-03-02 11:02:45.187334

"""

from typing import Sequence, Union
from uuid import uuid4

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "9f2e6b18c4d5"
down_revision: Union[str, Sequence[str], None] = "3c41d7a9e2b0"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (name, color_key, icon_name, {domain: [interests]})
TAXONOMY = [
    (
        "Skill & Craft",
        "categoryTeal",
        "palette",
        {
            "Arts & Crafts": ["Painting", "Pottery", "Knitting"],
            "Woodworking": ["Carving", "Furniture Making"],
        },
    ),
    (
        "Movement & Wellness",
        "categoryGreen",
        "activity",
        {
            "Team Sports": ["Basketball", "Football", "Volleyball"],
            "Outdoor Activities": ["Hiking", "Cycling"],
            "Mind & Body": ["Yoga", "Meditation"],
        },
    ),
    (
        "Gathering & Fun",
        "categoryPeach",
        "party-popper",
        {
            "Games": ["Board Games", "Chess"],
            "Food & Drink": ["Cooking", "Wine Tasting"],
        },
    ),
    (
        "Performance & Spectacle",
        "categoryBlue",
        "music",
        {
            "Music": ["Choir", "Guitar"],
            "Theatre": ["Improv"],
        },
    ),
    (
        "Community & Society",
        "categoryOrange",
        "users",
        {
            "Volunteering": ["Environmental Cleanup"],
            "Languages": ["Latvian Conversation"],
        },
    ),
    (
        "Practical & Resource",
        "categoryYellow",
        "wrench",
        {
            "Home & Garden": ["Gardening", "Repair Cafe"],
        },
    ),
]


def upgrade() -> None:
    """Seed the taxonomy."""
    tags_table = sa.table(
        "tags",
        sa.column("id", postgresql.UUID),
        sa.column("name", sa.String),
        sa.column("level", sa.SmallInteger),
        sa.column("parent_id", postgresql.UUID),
        sa.column("color_key", sa.String),
        sa.column("icon_name", sa.String),
    )
    tag_parents_table = sa.table(
        "tag_parents",
        sa.column("id", postgresql.UUID),
        sa.column("tag_id", postgresql.UUID),
        sa.column("parent_id", postgresql.UUID),
        sa.column("is_primary", sa.Boolean),
        sa.column("l1_category", sa.String),
        sa.column("l1_color_key", sa.String),
    )

    tags = []
    links = []

    def link(tag_id, parent_id, category, color_key):
        links.append(
            {
                "id": uuid4(),
                "tag_id": tag_id,
                "parent_id": parent_id,
                "is_primary": True,
                "l1_category": category,
                "l1_color_key": color_key,
            }
        )

    for category, color_key, icon_name, domains in TAXONOMY:
        category_id = uuid4()
        tags.append(
            {
                "id": category_id,
                "name": category,
                "level": 1,
                "parent_id": None,
                "color_key": color_key,
                "icon_name": icon_name,
            }
        )
        for domain, interests in domains.items():
            domain_id = uuid4()
            tags.append(
                {
                    "id": domain_id,
                    "name": domain,
                    "level": 2,
                    "parent_id": category_id,
                    "color_key": None,
                    "icon_name": None,
                }
            )
            link(domain_id, category_id, category, color_key)
            for interest in interests:
                interest_id = uuid4()
                tags.append(
                    {
                        "id": interest_id,
                        "name": interest,
                        "level": 3,
                        "parent_id": domain_id,
                        "color_key": None,
                        "icon_name": None,
                    }
                )
                link(interest_id, domain_id, category, color_key)

    # Parents are listed before children, so the self-referencing FK holds
    op.bulk_insert(tags_table, tags)
    op.bulk_insert(tag_parents_table, links)


def downgrade() -> None:
    """Remove seeded tags."""
    names = [category for category, _, _, _ in TAXONOMY]
    for _, _, _, domains in TAXONOMY:
        names.extend(domains)
        for interests in domains.values():
            names.extend(interests)

    # Children first; tag_parents rows go with their tags
    tags_table = sa.table(
        "tags", sa.column("name", sa.String), sa.column("level", sa.SmallInteger)
    )
    for level in (3, 2, 1):
        op.execute(
            tags_table.delete().where(
                tags_table.c.name.in_(names), tags_table.c.level == level
            )
        )
