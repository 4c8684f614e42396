"""Application layer DI providers."""

from dishka import Scope, provide

from kopiena.application.usecase.auth import GetCurrentUserUseCase
from kopiena.application.usecase.suggestion import (
    CreateSuggestionUseCase,
    GetPendingCountUseCase,
    ListSuggestionsUseCase,
    ReconcilePendingCountUseCase,
    ResolveSuggestionUseCase,
)
from kopiena.application.usecase.tag import (
    AssignTagParentUseCase,
    GetTagTreeUseCase,
    ListTagsUseCase,
    SearchTagsUseCase,
)
from kopiena.config import TaxonomySettings
from kopiena.domain.service import (
    JWTService,
    SuggestionService,
    TagService,
    UserService,
)
from kopiena.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service,
            user_service=user_service,
        )

    # Tag use cases
    @provide(scope=Scope.REQUEST)
    def get_list_tags_use_case(self, tag_service: TagService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_search_tags_use_case(self, tag_service: TagService) -> SearchTagsUseCase:
        """Provide search tags use case."""
        return SearchTagsUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_tag_tree_use_case(self, tag_service: TagService) -> GetTagTreeUseCase:
        """Provide tag tree use case."""
        return GetTagTreeUseCase(tag_service=tag_service)

    @provide(scope=Scope.REQUEST)
    def get_assign_tag_parent_use_case(
        self,
        tag_service: TagService,
        user_service: UserService,
    ) -> AssignTagParentUseCase:
        """Provide assign tag parent use case."""
        return AssignTagParentUseCase(
            tag_service=tag_service,
            user_service=user_service,
        )

    # Suggestion use cases
    @provide(scope=Scope.REQUEST)
    def get_create_suggestion_use_case(
        self, suggestion_service: SuggestionService
    ) -> CreateSuggestionUseCase:
        """Provide create suggestion use case."""
        return CreateSuggestionUseCase(suggestion_service=suggestion_service)

    @provide(scope=Scope.REQUEST)
    def get_pending_count_use_case(
        self,
        suggestion_service: SuggestionService,
        taxonomy_settings: TaxonomySettings,
    ) -> GetPendingCountUseCase:
        """Provide pending suggestion count use case."""
        return GetPendingCountUseCase(
            suggestion_service=suggestion_service,
            taxonomy_settings=taxonomy_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_suggestions_use_case(
        self,
        suggestion_service: SuggestionService,
        user_service: UserService,
    ) -> ListSuggestionsUseCase:
        """Provide list pending suggestions use case."""
        return ListSuggestionsUseCase(
            suggestion_service=suggestion_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_resolve_suggestion_use_case(
        self,
        suggestion_service: SuggestionService,
        user_service: UserService,
    ) -> ResolveSuggestionUseCase:
        """Provide resolve suggestion use case."""
        return ResolveSuggestionUseCase(
            suggestion_service=suggestion_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_reconcile_pending_count_use_case(
        self,
        suggestion_service: SuggestionService,
        user_service: UserService,
    ) -> ReconcilePendingCountUseCase:
        """Provide reconcile pending count use case."""
        return ReconcilePendingCountUseCase(
            suggestion_service=suggestion_service,
            user_service=user_service,
        )
