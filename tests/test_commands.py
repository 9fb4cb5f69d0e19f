"""Tests for the load_navigation_json management command."""

import json
from io import StringIO
from pathlib import Path

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from navigation.models import NavigationItem, NavigationTree

pytestmark = pytest.mark.django_db


def write_tree(tmp_path: Path, data) -> Path:
    path = tmp_path / "main.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


MAIN_MENU = {
    "name": "Main",
    "items": [
        {
            "draftData": {"content": [{"language": "en", "value": "Shop"}], "url": "/shop"},
            "expanded": True,
            "items": [
                {"draftData": {"content": [{"language": "en", "value": "Shoes"}]}},
            ],
        },
        {
            "draftData": {"content": [{"language": "en", "value": "Help"}], "url": "/help"},
            "isSecondary": True,
            "metadata": {"tagIds": [4]},
        },
    ],
}


def test_loads_tree_and_items(shop, tmp_path: Path) -> None:
    out = StringIO()

    call_command("load_navigation_json", str(write_tree(tmp_path, MAIN_MENU)), shop="acme", stdout=out)

    tree = NavigationTree.objects.get(shop=shop, name="Main")
    assert NavigationItem.objects.filter(shop=shop).count() == 3
    assert len(tree.draft_forest) == 2
    assert tree.draft_forest[0].expanded is True
    assert len(tree.draft_forest[0].items) == 1
    assert tree.draft_forest[1].is_secondary is True
    assert tree.items == []
    assert "3 items" in out.getvalue()


def test_publish_flag_publishes(shop, tmp_path: Path) -> None:
    call_command(
        "load_navigation_json",
        str(write_tree(tmp_path, MAIN_MENU)),
        shop="acme",
        publish=True,
        stdout=StringIO(),
    )

    tree = NavigationTree.objects.get(shop=shop, name="Main")
    assert tree.items == tree.draft_items
    assert not NavigationItem.objects.filter(shop=shop, has_unpublished_changes=True).exists()


def test_reloading_replaces_draft_structure(shop, tmp_path: Path) -> None:
    path = write_tree(tmp_path, MAIN_MENU)
    call_command("load_navigation_json", str(path), shop="acme", stdout=StringIO())

    call_command("load_navigation_json", str(path), shop="acme", stdout=StringIO())

    assert NavigationTree.objects.filter(shop=shop, name="Main").count() == 1


def test_invalid_node_rolls_back(shop, tmp_path: Path) -> None:
    data = {"name": "Main", "items": [
        {"draftData": {"content": [{"language": "en", "value": "Ok"}]}},
        {"expanded": True},
    ]}

    with pytest.raises(CommandError):
        call_command("load_navigation_json", str(write_tree(tmp_path, data)), shop="acme", stdout=StringIO())

    assert not NavigationItem.objects.exists()
    assert not NavigationTree.objects.exists()


def test_missing_file(shop, tmp_path: Path) -> None:
    with pytest.raises(CommandError):
        call_command("load_navigation_json", str(tmp_path / "nope.json"), shop="acme")


def test_unknown_shop(db, tmp_path: Path) -> None:
    with pytest.raises(CommandError):
        call_command("load_navigation_json", str(write_tree(tmp_path, MAIN_MENU)), shop="nope")


@pytest.mark.parametrize("draft_data", ["oops", ["en", "Home"], 7])
def test_non_object_draft_data_is_a_command_error(shop, tmp_path: Path, draft_data) -> None:
    data = {"name": "Main", "items": [{"draftData": draft_data}]}

    with pytest.raises(CommandError):
        call_command("load_navigation_json", str(write_tree(tmp_path, data)), shop="acme", stdout=StringIO())

    assert not NavigationTree.objects.exists()


def test_top_level_must_be_an_object(shop, tmp_path: Path) -> None:
    with pytest.raises(CommandError):
        call_command("load_navigation_json", str(write_tree(tmp_path, [MAIN_MENU])), shop="acme")
