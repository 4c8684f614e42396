"""Tag suggestion use cases."""

from .common import SuggestionInfo
from .create_suggestion import (
    CreateSuggestionRequest,
    CreateSuggestionResponse,
    CreateSuggestionUseCase,
)
from .get_pending_count import (
    GetPendingCountRequest,
    GetPendingCountResponse,
    GetPendingCountUseCase,
)
from .list_suggestions import (
    ListSuggestionsRequest,
    ListSuggestionsResponse,
    ListSuggestionsUseCase,
    PendingSuggestionItem,
)
from .reconcile_pending_count import (
    ReconcilePendingCountRequest,
    ReconcilePendingCountResponse,
    ReconcilePendingCountUseCase,
)
from .resolve_suggestion import (
    ResolveSuggestionRequest,
    ResolveSuggestionResponse,
    ResolveSuggestionUseCase,
)

__all__ = [
    "CreateSuggestionRequest",
    "CreateSuggestionResponse",
    "CreateSuggestionUseCase",
    "GetPendingCountRequest",
    "GetPendingCountResponse",
    "GetPendingCountUseCase",
    "ListSuggestionsRequest",
    "ListSuggestionsResponse",
    "ListSuggestionsUseCase",
    "PendingSuggestionItem",
    "ReconcilePendingCountRequest",
    "ReconcilePendingCountResponse",
    "ReconcilePendingCountUseCase",
    "ResolveSuggestionRequest",
    "ResolveSuggestionResponse",
    "ResolveSuggestionUseCase",
    "SuggestionInfo",
]
