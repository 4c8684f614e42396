"""initial_schema

Create the schema for the Kopiena tag taxonomy:
- Users (taxonomy-relevant columns: role, pending suggestion count)
- Tags (three-level taxonomy with a legacy single-parent pointer)
- Tag parents (many-to-many links, exactly one primary per tag)
- Tag suggestions (user proposals awaiting moderation)
- Notifications (in-app)
- Group and event tagging (read for usage counts)

Revision ID: 3c41d7a9e2b0
Revises:
Create Date: 2026-03-02 10:14:07.512903

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d7a9e2b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.Column(
            "pending_suggestion_count",
            sa.Integer(),
            nullable=False,
            server_default="0",
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "pending_suggestion_count >= 0",
            name="pending_suggestion_count_non_negative",
        ),
        sa.CheckConstraint("role IN ('USER', 'MODERATOR', 'ADMIN')", name="valid_role"),
    )
    op.create_index("idx_users_email", "users", ["email"], unique=True)

    # ========================================================================
    # TAGS table
    # ========================================================================
    op.create_table(
        "tags",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("color_key", sa.String(50), nullable=True),
        sa.Column("icon_name", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["parent_id"], ["tags.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("level BETWEEN 1 AND 3", name="valid_tag_level"),
        sa.CheckConstraint(
            "level <> 1 OR parent_id IS NULL", name="category_has_no_parent"
        ),
        sa.CheckConstraint(
            "status IN ('ACTIVE', 'INACTIVE')", name="valid_tag_status"
        ),
    )
    op.create_index("idx_tags_status_level", "tags", ["status", "level"])
    op.create_index("idx_tags_parent_id", "tags", ["parent_id"])
    op.create_index("idx_tags_name_lower", "tags", [sa.text("lower(name)")])

    # ========================================================================
    # TAG_PARENTS table
    # ========================================================================
    op.create_table(
        "tag_parents",
        _id_column(),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("l1_category", sa.String(100), nullable=True),
        sa.Column("l1_color_key", sa.String(50), nullable=True),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tag_id", "parent_id", name="uq_tag_parent"),
    )
    op.create_index("idx_tag_parents_parent_id", "tag_parents", ["parent_id"])
    op.create_index(
        "uq_tag_parents_primary",
        "tag_parents",
        ["tag_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    # ========================================================================
    # TAG_SUGGESTIONS table
    # ========================================================================
    op.create_table(
        "tag_suggestions",
        _id_column(),
        sa.Column("name_en", sa.String(100), nullable=False),
        sa.Column("name_lv", sa.String(100), nullable=False),
        sa.Column("level", sa.SmallInteger(), nullable=False, server_default="3"),
        sa.Column("parent_tag_ids", postgresql.ARRAY(sa.UUID()), nullable=False),
        sa.Column("suggested_by_id", sa.UUID(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("moderated_by_id", sa.UUID(), nullable=True),
        sa.Column("moderated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("moderator_notes", sa.Text(), nullable=True),
        sa.Column("merged_into_tag_id", sa.UUID(), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["suggested_by_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["moderated_by_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["merged_into_tag_id"], ["tags.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'DENIED', 'MERGED')",
            name="valid_suggestion_status",
        ),
        sa.CheckConstraint(
            "(status = 'MERGED') = (merged_into_tag_id IS NOT NULL)",
            name="merged_has_target",
        ),
    )
    op.create_index(
        "idx_tag_suggestions_status_created_at",
        "tag_suggestions",
        ["status", "created_at"],
    )
    op.create_index(
        "idx_tag_suggestions_suggested_by_id", "tag_suggestions", ["suggested_by_id"]
    )

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_user_id_created_at",
        "notifications",
        ["user_id", sa.text("created_at DESC")],
    )

    # ========================================================================
    # GROUP_TAGS / EVENT_TAGS tables
    # ========================================================================
    op.create_table(
        "group_tags",
        sa.Column("group_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("group_id", "tag_id"),
    )
    op.create_index("idx_group_tags_tag_id", "group_tags", ["tag_id"])

    op.create_table(
        "event_tags",
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("tag_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("event_id", "tag_id"),
    )
    op.create_index("idx_event_tags_tag_id", "event_tags", ["tag_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("event_tags")
    op.drop_table("group_tags")
    op.drop_table("notifications")
    op.drop_table("tag_suggestions")
    op.drop_table("tag_parents")
    op.drop_table("tags")
    op.drop_table("users")
