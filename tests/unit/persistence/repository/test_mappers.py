"""Unit tests for row <-> model mappers."""

from datetime import datetime
from uuid import uuid4

from kopiena.domain.model import TagSuggestion
from kopiena.domain.value import SuggestionStatus, TagId, TagSuggestionId, UserId
from kopiena.persistence.mappers import (
    row_to_tag,
    row_to_tag_suggestion,
    tag_suggestion_to_dict,
)


class TestTagMapper:
    """Tests for tag mapping."""

    def test_row_with_string_ids(self):
        """Rows from raw SQL may carry UUIDs as strings."""
        # Arrange
        tag_id = uuid4()
        parent_id = uuid4()
        now = datetime.now()
        row = {
            "id": str(tag_id),
            "name": "Team Sports",
            "level": 2,
            "parent_id": str(parent_id),
            "status": "ACTIVE",
            "color_key": None,
            "icon_name": None,
            "description": None,
            "created_at": now,
            "updated_at": now,
        }

        # Act
        tag = row_to_tag(row)

        # Assert
        assert tag.id == tag_id
        assert tag.parent_id == parent_id
        assert tag.is_active


class TestTagSuggestionMapper:
    """Tests for tag suggestion mapping."""

    def test_dict_stores_plain_values(self):
        # Arrange
        target = TagId(uuid4())
        suggestion = TagSuggestion(
            id=TagSuggestionId(uuid4()),
            name_en="Hoops",
            name_lv="Strītbols",
            parent_tag_ids=[TagId(uuid4())],
            suggested_by_id=UserId(uuid4()),
        ).resolve(SuggestionStatus.MERGED, UserId(uuid4()), merged_into_tag_id=target)

        # Act
        data = tag_suggestion_to_dict(suggestion)
        restored = row_to_tag_suggestion(data)

        # Assert
        assert data["level"] == 3
        assert data["status"] == "MERGED"
        assert restored == suggestion
