"""Assembly of flat tag records into the three-level taxonomy tree."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from kopiena.domain.model import Tag
from kopiena.domain.value import TagId, TagLevel, TagUsage


@dataclass
class TagTreeNode:
    """Node in the tag taxonomy tree.

    ``group_count`` and ``event_count`` count usage of this tag alone; the
    ``total_*`` fields include every descendant as well.
    """

    tag_id: TagId
    name: str
    level: TagLevel
    color_key: str | None = None
    icon_name: str | None = None
    group_count: int = 0
    event_count: int = 0
    total_group_count: int = 0
    total_event_count: int = 0
    children: list["TagTreeNode"] = field(default_factory=list)


def build_tag_tree(
    tags: Iterable[Tag], usage: Mapping[TagId, TagUsage] | None = None
) -> list[TagTreeNode]:
    """Build the category -> domain -> interest tree.

    Algorithm:
    1. Group level 2 and level 3 tags under their ``parent_id``
    2. Start from level 1 tags without a parent
    3. Attach level 2 children, then their level 3 children
    4. Sort every level by name, case-insensitively

    Tags whose parent is not in the input (orphans) never become reachable
    from a root and are therefore left out.

    Args:
        tags: Flat list of tags, normally all ACTIVE tags
        usage: Group and event counts per tag

    Returns:
        Level 1 nodes with their subtrees. Leaves have an empty children list.
    """
    usage = usage or {}
    tag_list = list(tags)

    children_by_parent: dict[TagId, list[Tag]] = defaultdict(list)
    for tag in tag_list:
        if tag.level != TagLevel.CATEGORY and tag.parent_id is not None:
            children_by_parent[tag.parent_id].append(tag)

    def build_node(tag: Tag) -> TagTreeNode:
        tag_usage = usage.get(tag.id, TagUsage())
        child_level = TagLevel(tag.level + 1) if tag.level < TagLevel.INTEREST else None

        children = [
            build_node(child)
            for child in children_by_parent.get(tag.id, [])
            if child.level == child_level
        ]
        children.sort(key=_sort_key)

        return TagTreeNode(
            tag_id=tag.id,
            name=tag.name,
            level=tag.level,
            color_key=tag.color_key,
            icon_name=tag.icon_name,
            group_count=tag_usage.group_count,
            event_count=tag_usage.event_count,
            total_group_count=tag_usage.group_count
            + sum(child.total_group_count for child in children),
            total_event_count=tag_usage.event_count
            + sum(child.total_event_count for child in children),
            children=children,
        )

    roots = [
        build_node(tag)
        for tag in tag_list
        if tag.level == TagLevel.CATEGORY and tag.parent_id is None
    ]
    roots.sort(key=_sort_key)
    return roots


def _sort_key(node: TagTreeNode) -> tuple[str, str]:
    return (node.name.casefold(), node.name)
