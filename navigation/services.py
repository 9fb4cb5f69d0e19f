# backend/navigation/services.py
"""
Draft/publish coordination for navigation items and trees.

Every function here is one transaction. Trees are locked with
SELECT ... FOR UPDATE for structure writes and publishing, and items are
locked before their references are checked, so a publish never sees a
half-written draft and a delete never races a structure update.
"""
import logging

from django.db import transaction

from .data import collect_item_ids, forest_to_json
from .exceptions import InconsistentState, NotFound, ReferencedByTree
from .models import NavigationItem, NavigationTree

logger = logging.getLogger(__name__)


def create_navigation_item(shop, draft_data, metadata=None) -> NavigationItem:
    """Create an item with only draft data. It is not linked into any tree."""
    item = NavigationItem.objects.create_item(shop, draft_data, metadata)
    logger.info("Created navigation item %s for shop %s", item.pk, shop.pk)
    return item


def update_navigation_item(shop, item_id, draft_data=None, metadata=None) -> NavigationItem:
    item = NavigationItem.objects.update_draft(
        shop, item_id, draft_data=draft_data, metadata=metadata
    )
    logger.info(
        "Updated navigation item %s (unpublished changes: %s)",
        item.pk,
        item.has_unpublished_changes,
    )
    return item


@transaction.atomic
def delete_navigation_item(shop, item_id) -> NavigationItem:
    """
    Delete an item no tree references, in its draft or published structure.
    """
    item = NavigationItem.objects.get_item(shop, item_id, lock=True)
    if item is None:
        raise NotFound(f"Navigation item {item_id} not found.")

    tree_ids = set(item.tree_references.values_list("tree_id", flat=True))
    if tree_ids:
        logger.warning(
            "Refused to delete navigation item %s, referenced by trees %s",
            item_id,
            sorted(tree_ids),
        )
        raise ReferencedByTree(item.pk, tree_ids)

    deleted = NavigationItem.objects.delete_item(shop, item_id)
    logger.info("Deleted navigation item %s for shop %s", item_id, shop.pk)
    return deleted


def create_navigation_tree(shop, name, draft_items=None) -> NavigationTree:
    tree = NavigationTree.objects.create_tree(shop, name, draft_items)
    logger.info("Created navigation tree %s for shop %s", tree.pk, shop.pk)
    return tree


def update_navigation_tree(shop, tree_id, name=None, draft_items=None) -> NavigationTree:
    """
    Replace the tree's name and/or draft structure.

    Unknown item ids raise DanglingReference and cycles raise
    InvalidStructure; either way nothing is written.
    """
    tree = NavigationTree.objects.update_draft_structure(
        shop, tree_id, name=name, draft_items=draft_items
    )
    logger.info("Updated draft structure of navigation tree %s", tree.pk)
    return tree


@transaction.atomic
def publish_navigation_changes(shop, tree_id) -> NavigationTree:
    """
    Promote the tree's draft structure and the draft data of every item it
    reaches to published, as one unit.

    Items only present in the previously published structure are left alone.
    """
    tree = NavigationTree.objects.get_by_id(shop, tree_id, lock=True)
    if tree is None:
        raise NotFound(f"Navigation tree {tree_id} not found.")

    forest = tree.draft_forest
    item_ids = collect_item_ids(forest)
    items = NavigationItem.objects.for_shop(shop).select_for_update().in_bulk(item_ids)

    missing = [item_id for item_id in item_ids if item_id not in items]
    if missing:
        logger.error(
            "Cannot publish navigation tree %s, missing items %s", tree.pk, missing
        )
        raise InconsistentState(missing, tree_id=tree.pk)

    for item_id in item_ids:
        item = items[item_id]
        # Rebuilt from the value type: the published copy never aliases the draft
        draft = item.draft
        item.published_data = draft.to_dict() if draft is not None else None
        item.save(update_fields=["published_data", "updated_at"])

    tree.items = forest_to_json(forest)
    tree.save(update_fields=["items", "updated_at"])
    tree.sync_references(is_draft=False)

    logger.info(
        "Published navigation tree %s with %d items", tree.pk, len(item_ids)
    )
    return tree
