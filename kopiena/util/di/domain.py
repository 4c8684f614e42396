"""Domain layer DI providers."""

from dishka import Scope, provide

from kopiena.config import AuthSettings, TaxonomySettings
from kopiena.domain.repository import (
    NotificationRepository,
    TagParentRepository,
    TagRepository,
    TagSuggestionRepository,
    UnitOfWork,
    UserRepository,
)
from kopiena.domain.service import (
    JWTService,
    NotificationService,
    SuggestionService,
    TagService,
    UserService,
)
from kopiena.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_tag_service(
        self,
        tag_repository: TagRepository,
        tag_parent_repository: TagParentRepository,
        unit_of_work: UnitOfWork,
        taxonomy_settings: TaxonomySettings,
    ) -> TagService:
        """Provide tag domain service."""
        return TagService(
            tag_repository=tag_repository,
            tag_parent_repository=tag_parent_repository,
            unit_of_work=unit_of_work,
            taxonomy_settings=taxonomy_settings,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        unit_of_work: UnitOfWork,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_suggestion_service(
        self,
        suggestion_repository: TagSuggestionRepository,
        tag_repository: TagRepository,
        tag_parent_repository: TagParentRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        tag_service: TagService,
        notification_service: NotificationService,
        taxonomy_settings: TaxonomySettings,
    ) -> SuggestionService:
        """Provide suggestion moderation domain service."""
        return SuggestionService(
            suggestion_repository=suggestion_repository,
            tag_repository=tag_repository,
            tag_parent_repository=tag_parent_repository,
            user_repository=user_repository,
            unit_of_work=unit_of_work,
            tag_service=tag_service,
            notification_service=notification_service,
            taxonomy_settings=taxonomy_settings,
        )
