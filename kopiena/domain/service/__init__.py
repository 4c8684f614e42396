"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .notification_service import NotificationService
from .suggestion_service import (
    PendingSuggestion,
    SuggestionResolution,
    SuggestionService,
)
from .tag_service import (
    CategoryRef,
    TagHierarchy,
    TagSearchHit,
    TagSearchResult,
    TagService,
)
from .tag_tree import TagTreeNode, build_tag_tree
from .user_service import UserService

__all__ = [
    "CategoryRef",
    "JWTService",
    "NotificationService",
    "PendingSuggestion",
    "Service",
    "SuggestionResolution",
    "SuggestionService",
    "TagHierarchy",
    "TagSearchHit",
    "TagSearchResult",
    "TagService",
    "TagTreeNode",
    "UserService",
    "build_tag_tree",
]
