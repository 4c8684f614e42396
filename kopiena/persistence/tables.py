"""SQLAlchemy table definitions for Kopiena.

These Core tables are used by the PostgreSQL repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (taxonomy-relevant columns only)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False),
    Column("name", String(255), nullable=True),
    Column("role", String(20), nullable=False, server_default="USER"),
    Column(
        "pending_suggestion_count", Integer, nullable=False, server_default="0"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "pending_suggestion_count >= 0", name="pending_suggestion_count_non_negative"
    ),
    CheckConstraint("role IN ('USER', 'MODERATOR', 'ADMIN')", name="valid_role"),
)

Index("idx_users_email", users_table.c.email, unique=True)

# ============================================================================
# TAGS TABLE (three-level taxonomy)
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("level", SmallInteger, nullable=False),
    # Legacy single-parent pointer, authoritative for levels 2 and 3
    Column("parent_id", UUID, ForeignKey("tags.id"), nullable=True),
    Column("status", String(20), nullable=False, server_default="ACTIVE"),
    Column("color_key", String(50), nullable=True),
    Column("icon_name", String(50), nullable=True),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("level BETWEEN 1 AND 3", name="valid_tag_level"),
    CheckConstraint("level <> 1 OR parent_id IS NULL", name="category_has_no_parent"),
    CheckConstraint("status IN ('ACTIVE', 'INACTIVE')", name="valid_tag_status"),
)

Index("idx_tags_status_level", tags_table.c.status, tags_table.c.level)
Index("idx_tags_parent_id", tags_table.c.parent_id)
Index("idx_tags_name_lower", func.lower(tags_table.c.name))

# ============================================================================
# TAG PARENTS TABLE (many-to-many tag -> parent links)
# ============================================================================
tag_parents_table = Table(
    "tag_parents",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    ),
    Column("is_primary", Boolean, nullable=False, server_default="false"),
    # Denormalized level 1 ancestor for display without a join
    Column("l1_category", String(100), nullable=True),
    Column("l1_color_key", String(50), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("tag_id", "parent_id", name="uq_tag_parent"),
)

Index("idx_tag_parents_parent_id", tag_parents_table.c.parent_id)
# At most one primary parent per tag
Index(
    "uq_tag_parents_primary",
    tag_parents_table.c.tag_id,
    unique=True,
    postgresql_where=tag_parents_table.c.is_primary,
)

# ============================================================================
# TAG SUGGESTIONS TABLE
# ============================================================================
tag_suggestions_table = Table(
    "tag_suggestions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name_en", String(100), nullable=False),
    Column("name_lv", String(100), nullable=False),
    Column("level", SmallInteger, nullable=False, server_default="3"),
    # Ordered: the first entry becomes the primary parent on approval
    Column("parent_tag_ids", postgresql.ARRAY(UUID), nullable=False),
    Column(
        "suggested_by_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(20), nullable=False, server_default="PENDING"),
    Column("moderated_by_id", UUID, ForeignKey("users.id"), nullable=True),
    Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
    Column("moderator_notes", Text, nullable=True),
    Column("merged_into_tag_id", UUID, ForeignKey("tags.id"), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('PENDING', 'APPROVED', 'DENIED', 'MERGED')",
        name="valid_suggestion_status",
    ),
    CheckConstraint(
        "(status = 'MERGED') = (merged_into_tag_id IS NOT NULL)",
        name="merged_has_target",
    ),
)

Index(
    "idx_tag_suggestions_status_created_at",
    tag_suggestions_table.c.status,
    tag_suggestions_table.c.created_at,
)
Index("idx_tag_suggestions_suggested_by_id", tag_suggestions_table.c.suggested_by_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("type", String(50), nullable=False),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=True),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_id_created_at",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)

# ============================================================================
# GROUP / EVENT TAGGING (owned by the groups and events features; read for usage)
# ============================================================================
group_tags_table = Table(
    "group_tags",
    metadata,
    Column("group_id", UUID, nullable=False),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    PrimaryKeyConstraint("group_id", "tag_id"),
)

Index("idx_group_tags_tag_id", group_tags_table.c.tag_id)

event_tags_table = Table(
    "event_tags",
    metadata,
    Column("event_id", UUID, nullable=False),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    PrimaryKeyConstraint("event_id", "tag_id"),
)

Index("idx_event_tags_tag_id", event_tags_table.c.tag_id)
