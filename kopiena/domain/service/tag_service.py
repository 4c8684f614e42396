"""Tag domain service: browsing, search and restructuring of the taxonomy."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import logfire

from kopiena.config import TaxonomySettings
from kopiena.domain.error import DuplicateError, NotFoundError, ValidationError
from kopiena.domain.model import Tag, TagParent
from kopiena.domain.repository import (
    TagParentRepository,
    TagRepository,
    UnitOfWork,
)
from kopiena.domain.value import TagId, TagLevel, TagParentId, TagStatus

from .base import Service
from .similarity import rank_by_relevance
from .tag_tree import TagTreeNode, build_tag_tree


@dataclass
class TagHierarchy:
    """Primary-parent path of a tag, from its category down to itself."""

    path: str
    color_key: str | None
    l1_id: TagId | None = None
    l1_name: str | None = None
    l2_id: TagId | None = None
    l2_name: str | None = None


@dataclass
class TagSearchHit:
    """A ranked search result."""

    tag: Tag
    hierarchy: TagHierarchy | None


@dataclass
class TagSearchResult:
    """Top search hits plus how many tags matched and were considered."""

    hits: list[TagSearchHit]
    total: int
    candidates: int


@dataclass
class CategoryRef:
    """Level 1 ancestor of a tag, as denormalized onto TagParent rows."""

    name: str | None
    color_key: str | None


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(
        self,
        tag_repository: TagRepository,
        tag_parent_repository: TagParentRepository,
        unit_of_work: UnitOfWork,
        taxonomy_settings: TaxonomySettings,
    ) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
            tag_parent_repository: Tag parent link repository
            unit_of_work: Atomic unit for multi-write operations
            taxonomy_settings: Search and quota configuration
        """
        self.tag_repository = tag_repository
        self.tag_parent_repository = tag_parent_repository
        self.unit_of_work = unit_of_work
        self.settings = taxonomy_settings

    async def get_by_id(self, tag_id: TagId) -> Tag:
        """Get tag by ID.

        Args:
            tag_id: Tag ID

        Returns:
            Tag entity

        Raises:
            NotFoundError: If tag not found
        """
        tag = await self.tag_repository.find_by_id(tag_id)
        if not tag:
            logfire.warn("Tag not found", tag_id=str(tag_id))
            raise NotFoundError("Tag", str(tag_id))
        return tag

    async def list_tags(
        self, level: int | None = None, parent_id: TagId | None = None
    ) -> list[Tag]:
        """List ACTIVE tags ordered by name.

        Args:
            level: Only list tags on this level
            parent_id: Only list children of this tag, through the legacy
                parent pointer or any primary or secondary link

        Returns:
            List of tags

        Raises:
            ValidationError: If level is not 1, 2 or 3
        """
        tag_level = _parse_level(level)
        with logfire.span(
            "tag_service.list_tags",
            level=level,
            parent_id=str(parent_id) if parent_id else None,
        ):
            tags = await self.tag_repository.find_all(
                level=tag_level, parent_id=parent_id, status=TagStatus.ACTIVE
            )
            logfire.info("Tags listed", count=len(tags))
            return tags

    async def search(
        self, query: str, level: int | None = None, limit: int | None = None
    ) -> TagSearchResult:
        """Fuzzy search over ACTIVE tags.

        Fetches a superset of candidates, attaches each candidate's primary
        hierarchy path and ranks them by their own name.

        Args:
            query: Free text query, at least two characters once trimmed
            level: Only search tags on this level
            limit: Maximum number of hits (defaults to the configured limit)

        Returns:
            Ranked hits with hierarchy, the number of relevant matches and the
            number of candidates fetched

        Raises:
            ValidationError: If query, level or limit is invalid
            StorageError: If the store fails
        """
        if limit is None:
            limit = self.settings.search_default_limit
        trimmed = (query or "").strip()
        if len(trimmed) < self.settings.search_min_query_length:
            raise ValidationError(
                f"Query must be at least {self.settings.search_min_query_length} "
                "characters"
            )
        tag_level = _parse_level(level)
        if limit < 1:
            raise ValidationError("Limit must be at least 1")

        with logfire.span(
            "tag_service.search", query=trimmed, level=level, limit=limit
        ):
            fetch_size = min(
                limit * self.settings.search_candidate_multiplier,
                self.settings.search_candidate_cap,
            )
            candidates = await self.tag_repository.find_all(
                level=tag_level, status=TagStatus.ACTIVE, limit=fetch_size
            )
            hierarchies = await self._build_hierarchies(candidates)

            ranked = rank_by_relevance(trimmed, candidates, lambda tag: tag.name)
            hits = [
                TagSearchHit(tag=tag, hierarchy=hierarchies.get(tag.id))
                for tag in ranked[:limit]
            ]

            logfire.info(
                "Tag search completed",
                query=trimmed,
                candidates=len(candidates),
                matches=len(ranked),
            )
            return TagSearchResult(
                hits=hits, total=len(ranked), candidates=len(candidates)
            )

    async def build_tree(self) -> list[TagTreeNode]:
        """Build the full taxonomy tree of ACTIVE tags with usage counts.

        Returns:
            Level 1 nodes with their subtrees
        """
        with logfire.span("tag_service.build_tree"):
            tags = await self.tag_repository.find_all(status=TagStatus.ACTIVE)
            usage = await self.tag_repository.count_usage()
            tree = build_tag_tree(tags, usage)
            logfire.info("Tag tree built", tags=len(tags), roots=len(tree))
            return tree

    async def resolve_category(self, parent: Tag) -> CategoryRef:
        """Find the level 1 ancestor reached from ``parent``.

        A level 1 parent is its own category. For a level 2 parent the
        primary link is followed first, then the legacy parent pointer.

        Args:
            parent: Level 1 or level 2 tag

        Returns:
            Category name and color key (both None if unresolvable)
        """
        if parent.level == TagLevel.CATEGORY:
            return CategoryRef(name=parent.name, color_key=parent.color_key)

        links = await self.tag_parent_repository.find_by_tag_ids(
            [parent.id], is_primary=True
        )
        link = links[0] if links else None
        category_id = link.parent_id if link else parent.parent_id
        category = (
            await self.tag_repository.find_by_id(category_id) if category_id else None
        )
        if category:
            return CategoryRef(name=category.name, color_key=category.color_key)
        if link:
            return CategoryRef(name=link.l1_category, color_key=link.l1_color_key)
        return CategoryRef(name=None, color_key=None)

    async def assign_parent(
        self, tag_id: TagId, parent_id: TagId, is_primary: bool = False
    ) -> TagParent:
        """Link a tag to an additional (or new primary) parent.

        When the new link is primary, the previous primary link is demoted
        and the tag's legacy parent pointer follows, all in one atomic unit.

        Args:
            tag_id: Child tag
            parent_id: Parent tag, exactly one level above the child
            is_primary: Whether the new link becomes the primary parent

        Returns:
            The created link

        Raises:
            NotFoundError: If either tag does not exist
            ValidationError: If the parent is inactive or on the wrong level
            DuplicateError: If the tag is already linked to the parent
        """
        with logfire.span(
            "tag_service.assign_parent",
            tag_id=str(tag_id),
            parent_id=str(parent_id),
            is_primary=is_primary,
        ):
            tag = await self.get_by_id(tag_id)
            parent = await self.get_by_id(parent_id)

            if tag.level == TagLevel.CATEGORY:
                raise ValidationError("Level 1 tags cannot have a parent")
            if parent.level != tag.level.parent_level or not parent.is_active:
                logfire.warn(
                    "Invalid parent for tag",
                    tag_id=str(tag_id),
                    parent_id=str(parent_id),
                    parent_level=int(parent.level),
                )
                raise ValidationError(
                    f"Parent of a level {int(tag.level)} tag must be an active "
                    f"level {int(tag.level) - 1} tag"
                )

            existing = await self.tag_parent_repository.find_by_tag_ids([tag.id])
            if any(link.parent_id == parent.id for link in existing):
                raise DuplicateError(f'"{tag.name}" is already linked to "{parent.name}"')

            category = await self.resolve_category(parent)
            link = TagParent(
                id=TagParentId(uuid4()),
                tag_id=tag.id,
                parent_id=parent.id,
                is_primary=is_primary,
                l1_category=category.name,
                l1_color_key=category.color_key,
            )

            async with self.unit_of_work.atomic():
                if is_primary:
                    await self.tag_parent_repository.demote_primary(tag.id)
                    await self.tag_repository.save(
                        tag.model_copy(
                            update={"parent_id": parent.id, "updated_at": datetime.now()}
                        )
                    )
                    if tag.level == TagLevel.DOMAIN:
                        # Children of a moved domain now sit under the new category
                        await self.tag_parent_repository.update_l1_for_parent(
                            tag.id, category.name, category.color_key
                        )
                saved = await self.tag_parent_repository.save(link)

            logfire.info(
                "Tag parent assigned",
                tag_id=str(tag_id),
                parent_id=str(parent_id),
                is_primary=is_primary,
            )
            return saved

    async def _build_hierarchies(self, tags: list[Tag]) -> dict[TagId, TagHierarchy]:
        """Reconstruct primary paths for a batch of tags.

        Walks at most two primary edges per tag, batching every hop into one
        query. Secondary links are ignored.
        """
        primary: dict[TagId, TagParent] = {}
        known: dict[TagId, Tag] = {tag.id: tag for tag in tags}

        async def load_hop(child_ids: list[TagId]) -> list[TagId]:
            pending = [tag_id for tag_id in child_ids if tag_id not in primary]
            if not pending:
                return []
            links = await self.tag_parent_repository.find_by_tag_ids(
                pending, is_primary=True
            )
            for link in links:
                primary[link.tag_id] = link
            missing = list(
                {link.parent_id for link in links if link.parent_id not in known}
            )
            if missing:
                for parent in await self.tag_repository.find_by_ids(missing):
                    known[parent.id] = parent
            return [link.parent_id for link in links]

        first_hop = await load_hop(
            [tag.id for tag in tags if tag.level != TagLevel.CATEGORY]
        )
        await load_hop(
            [
                parent_id
                for parent_id in first_hop
                if parent_id in known and known[parent_id].level == TagLevel.DOMAIN
            ]
        )

        hierarchies: dict[TagId, TagHierarchy] = {}
        for tag in tags:
            hierarchy = _hierarchy_for(tag, primary, known)
            if hierarchy:
                hierarchies[tag.id] = hierarchy
        return hierarchies


def _hierarchy_for(
    tag: Tag, primary: dict[TagId, TagParent], known: dict[TagId, Tag]
) -> TagHierarchy | None:
    if tag.level == TagLevel.CATEGORY:
        return TagHierarchy(
            path=tag.name, color_key=tag.color_key, l1_id=tag.id, l1_name=tag.name
        )

    link = primary.get(tag.id)
    if link is None:
        return None

    if tag.level == TagLevel.DOMAIN:
        l1 = known.get(link.parent_id)
        l1_name = l1.name if l1 else link.l1_category
        return TagHierarchy(
            path=_join_path(l1_name, tag.name),
            color_key=(l1.color_key if l1 else None) or link.l1_color_key,
            l1_id=l1.id if l1 else None,
            l1_name=l1_name,
            l2_id=tag.id,
            l2_name=tag.name,
        )

    l2 = known.get(link.parent_id)
    if l2 is None:
        return None
    l2_link = primary.get(l2.id)
    l1 = known.get(l2_link.parent_id) if l2_link else None

    # Fall back to the denormalized category when the chain is broken
    l1_name = l1.name if l1 else link.l1_category or (
        l2_link.l1_category if l2_link else None
    )
    color_key = (l1.color_key if l1 else None) or link.l1_color_key or (
        l2_link.l1_color_key if l2_link else None
    )
    return TagHierarchy(
        path=_join_path(l1_name, l2.name, tag.name),
        color_key=color_key,
        l1_id=l1.id if l1 else None,
        l1_name=l1_name,
        l2_id=l2.id,
        l2_name=l2.name,
    )


def _join_path(*names: str | None) -> str:
    return " > ".join(name for name in names if name)


def _parse_level(level: int | None) -> TagLevel | None:
    if level is None:
        return None
    if level not in (1, 2, 3):
        raise ValidationError(f"Level must be 1, 2 or 3, got {level}")
    return TagLevel(level)
