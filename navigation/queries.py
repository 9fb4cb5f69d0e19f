# backend/navigation/queries.py
import logging
from dataclasses import dataclass, field

from .data import NavigationTreeItem, collect_item_ids, filter_forest
from .exceptions import InconsistentState
from .models import NavigationItem, NavigationTree
from .pagination import SORT_ASC, SORT_BY_CREATED_AT, Page

logger = logging.getLogger(__name__)


@dataclass
class AssembledTreeItem:
    navigation_item: NavigationItem
    node: NavigationTreeItem
    content_for_language: str | None = None
    published_content_for_language: str | None = None
    items: list["AssembledTreeItem"] = field(default_factory=list)


@dataclass
class AssembledTree:
    tree: NavigationTree
    language: str
    items: list[AssembledTreeItem] = field(default_factory=list)
    draft_items: list[AssembledTreeItem] = field(default_factory=list)
    has_unpublished_changes: bool = False


def _assemble(forest, items_by_id, language) -> list[AssembledTreeItem]:
    assembled = []
    for node in forest:
        item = items_by_id[node.navigation_item_id]
        assembled.append(
            AssembledTreeItem(
                navigation_item=item,
                node=node,
                content_for_language=item.content_for_language(language),
                published_content_for_language=item.content_for_language(
                    language, published=True
                ),
                items=_assemble(node.items, items_by_id, language),
            )
        )
    return assembled


def navigation_tree_by_id(
    shop, tree_id, language, *, should_include_secondary=True
) -> AssembledTree | None:
    """
    Load a tree with every node resolved to its navigation item, to any depth.

    Returns None for an unknown tree. A node pointing at a missing item means
    stored state is broken and raises InconsistentState.
    """
    tree = NavigationTree.objects.get_by_id(shop, tree_id, language)
    if tree is None:
        return None

    published = tree.published_forest
    draft = tree.draft_forest
    if not should_include_secondary:
        published = filter_forest(published, lambda node: not node.is_secondary)
        draft = filter_forest(draft, lambda node: not node.is_secondary)

    item_ids = collect_item_ids(published + draft)
    items_by_id = NavigationItem.objects.for_shop(shop).in_bulk(item_ids)
    missing = [item_id for item_id in item_ids if item_id not in items_by_id]
    if missing:
        logger.warning(
            "Navigation tree %s references missing items %s", tree.pk, missing
        )
        raise InconsistentState(missing, tree_id=tree.pk)

    return AssembledTree(
        tree=tree,
        language=language,
        items=_assemble(published, items_by_id, language),
        draft_items=_assemble(draft, items_by_id, language),
        has_unpublished_changes=tree.has_unpublished_changes,
    )


def navigation_items_by_shop_id(
    shop,
    *,
    first=None,
    last=None,
    after=None,
    before=None,
    sort_by=SORT_BY_CREATED_AT,
    sort_order=SORT_ASC,
) -> Page:
    return NavigationItem.objects.list_by_shop(
        shop,
        first=first,
        last=last,
        after=after,
        before=before,
        sort_by=sort_by,
        sort_order=sort_order,
    )
