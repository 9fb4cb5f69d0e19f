# backend/navigation/management/commands/load_navigation_json.py
import json
import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from rest_framework.exceptions import APIException

from navigation import services
from navigation.models import NavigationTree
from shops.models import Shop

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Load a navigation tree and its items from a JSON file"

    def add_arguments(self, parser):
        parser.add_argument("path", type=str, help="Path to the JSON file to load")
        parser.add_argument("--shop", required=True, help="Slug of the owning shop")
        parser.add_argument(
            "--publish",
            action="store_true",
            help="Publish the tree after loading it",
        )

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")

        try:
            shop = Shop.objects.get(slug=options["shop"])
        except Shop.DoesNotExist:
            raise CommandError(f"Shop not found: {options['shop']}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise CommandError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CommandError("Expected a JSON object with 'name' and 'items'")

        name = data.get("name")
        nodes = data.get("items", [])
        if not name:
            raise CommandError("Missing 'name' for navigation tree")
        if not isinstance(nodes, list):
            raise CommandError("'items' must be a list")

        try:
            with transaction.atomic():
                tree, created_count = self._load(shop, name, nodes)
                if options["publish"]:
                    services.publish_navigation_changes(shop, tree.pk)
        except (APIException, ValueError) as exc:
            logger.exception("Loading navigation from %s failed", path)
            raise CommandError(f"Load failed: {exc}") from exc

        self.stdout.write(
            self.style.SUCCESS(
                f"Loaded navigation tree '{tree.name}' ({created_count} items)"
                + (" and published it" if options["publish"] else "")
            )
        )

    def _load(self, shop, name, nodes):
        created = []
        forest = [self._build_node(shop, node, created, f"items[{i}]") for i, node in enumerate(nodes)]

        tree = NavigationTree.objects.for_shop(shop).filter(name=name).first()
        if tree is None:
            tree = services.create_navigation_tree(shop, name, forest)
        else:
            tree = services.update_navigation_tree(shop, tree.pk, draft_items=forest)
        return tree, len(created)

    def _build_node(self, shop, node, created, where):
        if not isinstance(node, dict):
            raise ValueError(f"{where} is not an object")
        if "draftData" not in node:
            raise ValueError(f"{where} is missing 'draftData'")

        item = services.create_navigation_item(
            shop, node["draftData"], node.get("metadata")
        )
        created.append(item)

        children = node.get("items", [])
        if not isinstance(children, list):
            raise ValueError(f"{where}.items is not a list")

        return {
            "navigationItemId": item.pk,
            "expanded": node.get("expanded", False),
            "isVisible": node.get("isVisible", True),
            "isPrivate": node.get("isPrivate", False),
            "isSecondary": node.get("isSecondary", False),
            "items": [
                self._build_node(shop, child, created, f"{where}.items[{i}]")
                for i, child in enumerate(children)
            ],
        }
