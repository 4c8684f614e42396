"""Tag suggestion domain service: submission and moderation workflow."""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from kopiena.config import TaxonomySettings
from kopiena.domain.error import (
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    QuotaExceededError,
    UnknownMergeTargetError,
    ValidationError,
)
from kopiena.domain.model import Notification, Tag, TagParent, TagSuggestion, User
from kopiena.domain.repository import (
    TagRepository,
    TagParentRepository,
    TagSuggestionRepository,
    UnitOfWork,
    UserRepository,
)
from kopiena.domain.value import (
    SuggestionAction,
    SuggestionStatus,
    TagId,
    TagLevel,
    TagParentId,
    TagStatus,
    TagSuggestionId,
    UserId,
)

from .base import Service
from .notification_service import NotificationService
from .tag_service import TagService


@dataclass
class SuggestionResolution:
    """Outcome of a moderation action.

    ``tag`` is the tag created by an approval. ``notification`` is None if
    the submitter could not be notified.
    """

    suggestion: TagSuggestion
    tag: Tag | None = None
    notification: Notification | None = None


@dataclass
class PendingSuggestion:
    """A pending suggestion with its submitter and proposed parents resolved."""

    suggestion: TagSuggestion
    submitter: User | None
    parent_tags: list[Tag]


class SuggestionService(Service):
    """Domain service for the tag suggestion workflow.

    A suggestion is created PENDING and moves to exactly one of APPROVED,
    DENIED or MERGED. Every state change and the matching change to the
    submitter's pending count happen in one atomic unit. The submitter is
    notified once the unit has completed.
    """

    def __init__(
        self,
        suggestion_repository: TagSuggestionRepository,
        tag_repository: TagRepository,
        tag_parent_repository: TagParentRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        tag_service: TagService,
        notification_service: NotificationService,
        taxonomy_settings: TaxonomySettings,
    ) -> None:
        """Initialize suggestion service.

        Args:
            suggestion_repository: Suggestion repository
            tag_repository: Tag repository
            tag_parent_repository: Tag parent link repository
            user_repository: User repository
            unit_of_work: Atomic unit for state transitions
            tag_service: Tag domain service
            notification_service: Notification domain service
            taxonomy_settings: Quota configuration
        """
        self.suggestion_repository = suggestion_repository
        self.tag_repository = tag_repository
        self.tag_parent_repository = tag_parent_repository
        self.user_repository = user_repository
        self.unit_of_work = unit_of_work
        self.tag_service = tag_service
        self.notification_service = notification_service
        self.settings = taxonomy_settings

    async def create(
        self,
        user_id: UserId,
        name_en: str | None,
        name_lv: str | None,
        parent_tag_ids: list[TagId] | None,
    ) -> TagSuggestion:
        """Submit a new level 3 tag suggestion.

        Checks run in order and stop at the first failure: quota, required
        fields, clash with an ACTIVE tag, clash with a PENDING suggestion,
        parent validity. The insert and the quota increment then run as one
        atomic unit.

        Args:
            user_id: Submitter
            name_en: English name
            name_lv: Latvian name
            parent_tag_ids: Proposed level 2 parents, primary first

        Returns:
            The created PENDING suggestion

        Raises:
            NotFoundError: If the submitter does not exist
            QuotaExceededError: If the submitter has too many pending suggestions
            ValidationError: If a field is missing or a parent is invalid
            DuplicateError: If a tag or pending suggestion already has the name
        """
        maximum = self.settings.max_pending_suggestions
        with logfire.span("suggestion_service.create", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))

            if user.pending_suggestion_count >= maximum:
                logfire.warn(
                    "Suggestion quota exceeded",
                    user_id=str(user_id),
                    pending=user.pending_suggestion_count,
                )
                raise QuotaExceededError(maximum)

            name_en = (name_en or "").strip()
            name_lv = (name_lv or "").strip()
            if not name_en or not name_lv or not parent_tag_ids:
                raise ValidationError(
                    "English name, Latvian name and at least one parent tag are required"
                )

            existing_tags = await self.tag_repository.find_by_names_insensitive(
                [name_en, name_lv], status=TagStatus.ACTIVE
            )
            if existing_tags:
                logfire.warn(
                    "Suggestion duplicates existing tag",
                    tag_id=str(existing_tags[0].id),
                    name=existing_tags[0].name,
                )
                raise DuplicateError(f'A tag named "{existing_tags[0].name}" already exists')

            pending = await self.suggestion_repository.find_pending_by_names(
                name_en, name_lv
            )
            if pending:
                logfire.warn(
                    "Suggestion duplicates pending suggestion",
                    suggestion_id=str(pending[0].id),
                )
                raise DuplicateError(
                    f'A suggestion for "{pending[0].name_en}" is already pending review'
                )

            await self._check_parents(parent_tag_ids)

            suggestion = TagSuggestion(
                id=TagSuggestionId(uuid4()),
                name_en=name_en,
                name_lv=name_lv,
                level=TagLevel.INTEREST,
                parent_tag_ids=list(parent_tag_ids),
                suggested_by_id=user_id,
            )

            async with self.unit_of_work.atomic():
                saved = await self.suggestion_repository.save(suggestion)
                incremented = await self.user_repository.increment_pending_suggestions(
                    user_id, maximum
                )
                if not incremented:
                    # Another submission took the last slot since the check above
                    logfire.warn("Suggestion quota race lost", user_id=str(user_id))
                    raise QuotaExceededError(maximum)

            logfire.info(
                "Suggestion created",
                suggestion_id=str(saved.id),
                user_id=str(user_id),
                name_en=name_en,
            )
            return saved

    async def resolve(
        self,
        suggestion_id: TagSuggestionId,
        action: SuggestionAction,
        moderator_id: UserId,
        notes: str | None = None,
        merged_into_tag_id: TagId | None = None,
    ) -> SuggestionResolution:
        """Dispatch a moderation action.

        Args:
            suggestion_id: Suggestion to resolve
            action: approve, deny or merge
            moderator_id: Acting moderator
            notes: Moderator notes, shown to the submitter on denial
            merged_into_tag_id: Target tag, required for merge

        Returns:
            Resolution outcome
        """
        if action == SuggestionAction.APPROVE:
            return await self.approve(suggestion_id, moderator_id, notes)
        if action == SuggestionAction.DENY:
            return await self.deny(suggestion_id, moderator_id, notes)
        return await self.merge(suggestion_id, moderator_id, merged_into_tag_id, notes)

    async def approve(
        self,
        suggestion_id: TagSuggestionId,
        moderator_id: UserId,
        notes: str | None = None,
    ) -> SuggestionResolution:
        """Approve a suggestion, creating its level 3 tag.

        The tag is named after ``name_en`` and wired only to the first
        proposed parent, through the legacy pointer and one primary link.

        Args:
            suggestion_id: Suggestion to approve
            moderator_id: Acting moderator
            notes: Moderator notes

        Returns:
            Resolution with the created tag

        Raises:
            NotFoundError: If the suggestion does not exist
            InvalidStateError: If the suggestion is not PENDING
            ValidationError: If the primary parent no longer exists
        """
        with logfire.span(
            "suggestion_service.approve",
            suggestion_id=str(suggestion_id),
            moderator_id=str(moderator_id),
        ):
            suggestion = await self._get_pending(suggestion_id)

            parent_id = suggestion.parent_tag_ids[0]
            parent = await self.tag_repository.find_by_id(parent_id)
            if not parent:
                raise ValidationError(f"Parent tag no longer exists: {parent_id}")
            category = await self.tag_service.resolve_category(parent)

            tag = Tag(
                id=TagId(uuid4()),
                name=suggestion.name_en,
                level=TagLevel.INTEREST,
                parent_id=parent.id,
                status=TagStatus.ACTIVE,
            )
            link = TagParent(
                id=TagParentId(uuid4()),
                tag_id=tag.id,
                parent_id=parent.id,
                is_primary=True,
                l1_category=category.name,
                l1_color_key=category.color_key,
            )
            resolved = suggestion.resolve(SuggestionStatus.APPROVED, moderator_id, notes)

            async with self.unit_of_work.atomic():
                await self.tag_repository.save(tag)
                await self.tag_parent_repository.save(link)
                await self._commit_resolution(resolved)

            logfire.info(
                "Suggestion approved",
                suggestion_id=str(suggestion_id),
                tag_id=str(tag.id),
            )
            notification = await self.notification_service.notify_suggestion_resolved(
                resolved
            )
            return SuggestionResolution(
                suggestion=resolved, tag=tag, notification=notification
            )

    async def deny(
        self,
        suggestion_id: TagSuggestionId,
        moderator_id: UserId,
        notes: str | None = None,
    ) -> SuggestionResolution:
        """Deny a suggestion.

        Args:
            suggestion_id: Suggestion to deny
            moderator_id: Acting moderator
            notes: Reason, passed on to the submitter

        Returns:
            Resolution outcome

        Raises:
            NotFoundError: If the suggestion does not exist
            InvalidStateError: If the suggestion is not PENDING
        """
        with logfire.span(
            "suggestion_service.deny",
            suggestion_id=str(suggestion_id),
            moderator_id=str(moderator_id),
        ):
            suggestion = await self._get_pending(suggestion_id)
            resolved = suggestion.resolve(SuggestionStatus.DENIED, moderator_id, notes)

            async with self.unit_of_work.atomic():
                await self._commit_resolution(resolved)

            logfire.info("Suggestion denied", suggestion_id=str(suggestion_id))
            notification = await self.notification_service.notify_suggestion_resolved(
                resolved
            )
            return SuggestionResolution(suggestion=resolved, notification=notification)

    async def merge(
        self,
        suggestion_id: TagSuggestionId,
        moderator_id: UserId,
        merged_into_tag_id: TagId | None,
        notes: str | None = None,
    ) -> SuggestionResolution:
        """Merge a suggestion into an existing tag.

        Args:
            suggestion_id: Suggestion to merge
            moderator_id: Acting moderator
            merged_into_tag_id: Existing tag the suggestion duplicates
            notes: Moderator notes

        Returns:
            Resolution outcome

        Raises:
            NotFoundError: If the suggestion does not exist
            InvalidStateError: If the suggestion is not PENDING
            ValidationError: If no target is given
            UnknownMergeTargetError: If the target tag does not exist
        """
        with logfire.span(
            "suggestion_service.merge",
            suggestion_id=str(suggestion_id),
            moderator_id=str(moderator_id),
            merged_into_tag_id=str(merged_into_tag_id) if merged_into_tag_id else None,
        ):
            suggestion = await self._get_pending(suggestion_id)

            if merged_into_tag_id is None:
                raise ValidationError("merged_into_tag_id is required for merge")
            target = await self.tag_repository.find_by_id(merged_into_tag_id)
            if not target:
                logfire.warn("Unknown merge target", tag_id=str(merged_into_tag_id))
                raise UnknownMergeTargetError(str(merged_into_tag_id))

            resolved = suggestion.resolve(
                SuggestionStatus.MERGED,
                moderator_id,
                notes,
                merged_into_tag_id=target.id,
            )

            async with self.unit_of_work.atomic():
                await self._commit_resolution(resolved)

            logfire.info(
                "Suggestion merged",
                suggestion_id=str(suggestion_id),
                tag_id=str(target.id),
            )
            notification = await self.notification_service.notify_suggestion_resolved(
                resolved, merged_into_name=target.name
            )
            return SuggestionResolution(suggestion=resolved, notification=notification)

    async def list_pending(self) -> list[PendingSuggestion]:
        """List PENDING suggestions, oldest first, for the moderation queue.

        Returns:
            Pending suggestions with submitters and parent tags
        """
        with logfire.span("suggestion_service.list_pending"):
            suggestions = await self.suggestion_repository.find_by_status(
                SuggestionStatus.PENDING
            )
            parent_ids = list(
                {parent_id for s in suggestions for parent_id in s.parent_tag_ids}
            )
            parents = {
                tag.id: tag for tag in await self.tag_repository.find_by_ids(parent_ids)
            }

            submitters: dict[UserId, User | None] = {}
            for s in suggestions:
                if s.suggested_by_id not in submitters:
                    submitters[s.suggested_by_id] = await self.user_repository.find_by_id(
                        s.suggested_by_id
                    )

            logfire.info("Pending suggestions listed", count=len(suggestions))
            return [
                PendingSuggestion(
                    suggestion=s,
                    submitter=submitters[s.suggested_by_id],
                    parent_tags=[parents[p] for p in s.parent_tag_ids if p in parents],
                )
                for s in suggestions
            ]

    async def get_pending_count(self, user_id: UserId) -> int:
        """Get a user's cached pending suggestion count.

        Args:
            user_id: User ID

        Returns:
            Pending suggestion count, 0 for unknown users
        """
        with logfire.span("suggestion_service.get_pending_count", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            return user.pending_suggestion_count if user else 0

    async def reconcile_pending_count(self, user_id: UserId) -> int:
        """Recount a user's PENDING suggestions and overwrite the cached count.

        Repair operation for a counter that drifted; never on the hot path.

        Args:
            user_id: User ID

        Returns:
            The recounted value

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span(
            "suggestion_service.reconcile_pending_count", user_id=str(user_id)
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))

            async with self.unit_of_work.atomic():
                count = await self.suggestion_repository.count_pending_by_user(user_id)
                await self.user_repository.set_pending_suggestions(user_id, count)

            if count != user.pending_suggestion_count:
                logfire.warn(
                    "Pending suggestion count drifted",
                    user_id=str(user_id),
                    cached=user.pending_suggestion_count,
                    actual=count,
                )
            else:
                logfire.info("Pending suggestion count verified", user_id=str(user_id))
            return count

    async def _get_pending(self, suggestion_id: TagSuggestionId) -> TagSuggestion:
        suggestion = await self.suggestion_repository.find_by_id(suggestion_id)
        if not suggestion:
            logfire.warn("Suggestion not found", suggestion_id=str(suggestion_id))
            raise NotFoundError("Suggestion", str(suggestion_id))
        if not suggestion.is_pending:
            logfire.warn(
                "Suggestion already resolved",
                suggestion_id=str(suggestion_id),
                status=suggestion.status.value,
            )
            raise InvalidStateError(
                f"Suggestion has already been {suggestion.status.value.lower()}"
            )
        return suggestion

    async def _commit_resolution(self, resolved: TagSuggestion) -> None:
        """Write a resolution and release the submitter's quota slot.

        Must run inside an atomic unit.
        """
        if not await self.suggestion_repository.save_resolution(resolved):
            # A concurrent moderator resolved it first
            raise InvalidStateError("Suggestion has already been resolved")
        await self.user_repository.decrement_pending_suggestions(
            resolved.suggested_by_id
        )

    async def _check_parents(self, parent_tag_ids: list[TagId]) -> None:
        if len(set(parent_tag_ids)) != len(parent_tag_ids):
            raise ValidationError("Parent tags must not repeat")

        parents = {
            tag.id: tag
            for tag in await self.tag_repository.find_by_ids(list(set(parent_tag_ids)))
        }
        for parent_id in parent_tag_ids:
            parent = parents.get(parent_id)
            if (
                parent is None
                or parent.level != TagLevel.DOMAIN
                or parent.status != TagStatus.ACTIVE
            ):
                logfire.warn("Invalid suggestion parent", parent_id=str(parent_id))
                raise ValidationError(
                    f"Parent tag must be an active level 2 tag: {parent_id}"
                )
