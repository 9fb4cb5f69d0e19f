# backend/navigation/models.py
import logging

from django.conf import settings
from django.db import models, transaction

from shops.models import Shop

from .data import (
    NavigationItemData,
    collect_item_ids,
    forest_to_json,
    parse_forest,
)
from .exceptions import DanglingReference, NotFound
from .pagination import paginate
from .translations import resolve

logger = logging.getLogger(__name__)


class NavigationItemQuerySet(models.QuerySet):
    """Navigation item store. Mutations lock the rows they touch."""

    def for_shop(self, shop):
        return self.filter(shop=shop)

    def get_item(self, shop, item_id, *, lock=False):
        qs = self.for_shop(shop).filter(pk=item_id)
        if lock:
            qs = qs.select_for_update()
        return qs.first()

    def create_item(self, shop, draft_data, metadata=None):
        draft = NavigationItemData.coerce(draft_data)
        return self.create(
            shop=shop,
            draft_data=draft.to_dict() if draft is not None else None,
            metadata=dict(metadata or {}),
        )

    @transaction.atomic
    def update_draft(self, shop, item_id, draft_data=None, metadata=None):
        item = self.get_item(shop, item_id, lock=True)
        if item is None:
            raise NotFound(f"Navigation item {item_id} not found.")

        update_fields = ["updated_at"]
        if draft_data is not None:
            item.draft_data = NavigationItemData.coerce(draft_data).to_dict()
            update_fields.append("draft_data")
        if metadata is not None:
            item.metadata = dict(metadata)
            update_fields.append("metadata")

        item.save(update_fields=update_fields)
        return item

    @transaction.atomic
    def delete_item(self, shop, item_id):
        item = self.get_item(shop, item_id, lock=True)
        if item is None:
            raise NotFound(f"Navigation item {item_id} not found.")

        pk = item.pk
        item.delete()
        # Django clears the pk on delete; hand back the last state intact
        item.pk = pk
        return item

    def list_by_shop(self, shop, **pagination):
        return paginate(self.for_shop(shop), **pagination)


class NavigationItem(models.Model):
    """
    A single navigation entry with a draft and a published payload.

    `metadata` is not versioned: edits apply immediately.
    """

    shop = models.ForeignKey(
        Shop, related_name="navigation_items", on_delete=models.CASCADE
    )
    draft_data = models.JSONField(null=True, blank=True)
    published_data = models.JSONField(
        null=True,
        blank=True,
        help_text="Null until the item is published as part of a tree.",
    )
    metadata = models.JSONField(default=dict, blank=True)
    has_unpublished_changes = models.BooleanField(default=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NavigationItemQuerySet.as_manager()

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name = "Navigation Item"
        verbose_name_plural = "Navigation Items"

    def __str__(self) -> str:
        draft = self.draft
        label = resolve(draft.content, settings.NAVIGATION_DEFAULT_LANGUAGE) if draft else None
        return label or f"Navigation item {self.pk}"

    @property
    def draft(self) -> NavigationItemData | None:
        return NavigationItemData.coerce(self.draft_data)

    @property
    def published(self) -> NavigationItemData | None:
        return NavigationItemData.coerce(self.published_data)

    def compute_has_unpublished_changes(self) -> bool:
        # Compare values, not raw JSON, so key order and defaults don't count
        return self.draft != self.published

    def content_for_language(self, language, *, published=False) -> str | None:
        data = self.published if published else self.draft
        if data is None:
            return None
        return resolve(data.content, language)

    def save(self, *args, **kwargs):
        self.has_unpublished_changes = self.compute_has_unpublished_changes()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and (
            "draft_data" in update_fields or "published_data" in update_fields
        ):
            kwargs["update_fields"] = set(update_fields) | {"has_unpublished_changes"}
        super().save(*args, **kwargs)


class NavigationTreeQuerySet(models.QuerySet):
    """Navigation tree store."""

    def for_shop(self, shop):
        return self.filter(shop=shop)

    def get_by_id(self, shop, tree_id, language=None, *, lock=False):
        # `language` only matters to whoever localizes the result
        qs = self.for_shop(shop).filter(pk=tree_id)
        if lock:
            qs = qs.select_for_update()
        return qs.first()

    def list_by_shop(self, shop):
        return self.for_shop(shop).order_by("name", "id")

    @transaction.atomic
    def create_tree(self, shop, name, draft_items=None):
        forest = parse_forest(draft_items)
        lock_referenced_items(shop, collect_item_ids(forest))

        tree = self.create(shop=shop, name=name, draft_items=forest_to_json(forest))
        tree.sync_references(is_draft=True)
        return tree

    @transaction.atomic
    def update_draft_structure(self, shop, tree_id, name=None, draft_items=None):
        tree = self.get_by_id(shop, tree_id, lock=True)
        if tree is None:
            raise NotFound(f"Navigation tree {tree_id} not found.")

        update_fields = ["updated_at"]
        forest = None
        if draft_items is not None:
            forest = parse_forest(draft_items)
            lock_referenced_items(shop, collect_item_ids(forest))
            tree.draft_items = forest_to_json(forest)
            update_fields.append("draft_items")
        if name is not None:
            tree.name = name
            update_fields.append("name")

        tree.save(update_fields=update_fields)
        if forest is not None:
            tree.sync_references(is_draft=True)
        return tree


def lock_referenced_items(shop, item_ids):
    """
    Lock the navigation items a structure is about to reference.

    Raises DanglingReference when any of them is missing, before anything is
    written. Holding the row locks keeps a concurrent delete from slipping in
    between this check and the reference rows being written.
    """
    if not item_ids:
        return {}
    found = NavigationItem.objects.for_shop(shop).select_for_update().in_bulk(item_ids)
    missing = [item_id for item_id in item_ids if item_id not in found]
    if missing:
        logger.info("Rejected navigation structure for shop %s, missing items %s", shop.pk, missing)
        raise DanglingReference(missing)
    return found


class NavigationTree(models.Model):
    """
    A named forest of navigation items.

    `draft_items` is the working structure, `items` the published one. The
    name is not versioned.
    """

    shop = models.ForeignKey(
        Shop, related_name="navigation_trees", on_delete=models.CASCADE
    )
    name = models.CharField(max_length=200)
    items = models.JSONField(default=list, blank=True)
    draft_items = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NavigationTreeQuerySet.as_manager()

    class Meta:
        ordering = ["name", "id"]
        verbose_name = "Navigation Tree"
        verbose_name_plural = "Navigation Trees"

    def __str__(self) -> str:
        return self.name

    @property
    def published_forest(self):
        return parse_forest(self.items)

    @property
    def draft_forest(self):
        return parse_forest(self.draft_items)

    def has_structure_changes(self) -> bool:
        return self.draft_forest != self.published_forest

    @property
    def has_unpublished_changes(self) -> bool:
        if self.has_structure_changes():
            return True
        item_ids = collect_item_ids(self.draft_forest)
        return NavigationItem.objects.filter(
            shop_id=self.shop_id, pk__in=item_ids, has_unpublished_changes=True
        ).exists()

    def sync_references(self, *, is_draft: bool):
        forest = self.draft_forest if is_draft else self.published_forest
        self.item_references.filter(is_draft=is_draft).delete()
        NavigationTreeItemReference.objects.bulk_create(
            NavigationTreeItemReference(
                tree=self, navigation_item_id=item_id, is_draft=is_draft
            )
            for item_id in collect_item_ids(forest)
        )


class NavigationTreeItemReference(models.Model):
    """
    Index of which trees reference which navigation items.

    One row per (tree, item, draft/published). Rewritten together with the
    structure it mirrors; RESTRICT keeps referenced items from being deleted on their own.
    """

    tree = models.ForeignKey(
        NavigationTree, related_name="item_references", on_delete=models.CASCADE
    )
    navigation_item = models.ForeignKey(
        NavigationItem, related_name="tree_references", on_delete=models.RESTRICT
    )
    is_draft = models.BooleanField()

    class Meta:
        unique_together = ("tree", "navigation_item", "is_draft")

    def __str__(self) -> str:
        state = "draft" if self.is_draft else "published"
        return f"{self.tree_id} -> {self.navigation_item_id} ({state})"
