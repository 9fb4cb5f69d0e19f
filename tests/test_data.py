"""Tests for navigation value types and forest helpers."""

import pytest

from navigation.data import (
    ContentEntry,
    NavigationItemData,
    NavigationTreeItem,
    collect_item_ids,
    filter_forest,
    forest_to_json,
    parse_forest,
)
from navigation.exceptions import InvalidStructure


class TestNavigationItemData:
    """Tests for NavigationItemData."""

    def test_from_dict_applies_defaults(self) -> None:
        data = NavigationItemData.from_dict({"content": [{"language": "en", "value": "Home"}]})

        assert data.content == (ContentEntry("en", "Home"),)
        assert data.class_names is None
        assert data.url is None
        assert data.is_url_relative is True
        assert data.should_open_in_new_window is False

    def test_to_dict_uses_camel_case(self) -> None:
        data = NavigationItemData(
            content=(ContentEntry("en", "Sale"),),
            class_names="nav-sale",
            url="/sale",
            is_url_relative=True,
            should_open_in_new_window=True,
        )

        assert data.to_dict() == {
            "content": [{"language": "en", "value": "Sale"}],
            "classNames": "nav-sale",
            "url": "/sale",
            "isUrlRelative": True,
            "shouldOpenInNewWindow": True,
        }

    def test_rejects_duplicate_languages(self) -> None:
        with pytest.raises(ValueError):
            NavigationItemData(content=(ContentEntry("en", "A"), ContentEntry("en", "B")))

    def test_rejects_malformed_content(self) -> None:
        with pytest.raises(ValueError):
            NavigationItemData.from_dict({"content": [{"value": "no language"}]})

    @pytest.mark.parametrize("raw", ["oops", ["en", "Home"], 3])
    def test_rejects_non_object_data(self, raw) -> None:
        with pytest.raises(ValueError):
            NavigationItemData.from_dict(raw)

    def test_values_compare_by_value(self) -> None:
        raw = {"content": [{"language": "en", "value": "Home"}], "url": "/"}

        assert NavigationItemData.from_dict(raw) == NavigationItemData.from_dict(dict(raw))

    def test_with_content_returns_new_value(self) -> None:
        original = NavigationItemData(content=(ContentEntry("en", "Home"),))

        updated = original.with_content("en", "Home Page").with_content("de", "Startseite")

        assert original.content == (ContentEntry("en", "Home"),)
        assert updated.content == (
            ContentEntry("en", "Home Page"),
            ContentEntry("de", "Startseite"),
        )


class TestParseForest:
    """Tests for parse_forest()."""

    def test_none_is_empty_forest(self) -> None:
        assert parse_forest(None) == ()

    def test_parses_nested_nodes_with_defaults(self) -> None:
        forest = parse_forest([
            {"navigationItemId": 1, "expanded": True, "items": [
                {"navigationItemId": 2},
            ]},
        ])

        assert forest == (
            NavigationTreeItem(
                navigation_item_id=1,
                expanded=True,
                items=(NavigationTreeItem(navigation_item_id=2),),
            ),
        )

    def test_json_round_trip_is_stable(self) -> None:
        raw = [{"navigationItemId": 1, "items": [{"navigationItemId": 2, "isSecondary": True}]}]

        forest = parse_forest(raw)

        assert parse_forest(forest_to_json(forest)) == forest

    def test_accepts_numeric_string_ids(self) -> None:
        assert parse_forest([{"navigationItemId": "7"}])[0].navigation_item_id == 7

    def test_rejects_non_list(self) -> None:
        with pytest.raises(InvalidStructure):
            parse_forest({"navigationItemId": 1})

    def test_rejects_missing_item_id(self) -> None:
        with pytest.raises(InvalidStructure):
            parse_forest([{"expanded": True}])

    @pytest.mark.parametrize("bad_id", [True, None, "abc", 1.5, "\u00b2", "\u0663", 0, -4, "0", 2**63, 10**30])
    def test_rejects_invalid_item_ids(self, bad_id) -> None:
        with pytest.raises(InvalidStructure):
            parse_forest([{"navigationItemId": bad_id}])

    def test_accepts_numeric_string_ids(self) -> None:
        assert parse_forest([{"navigationItemId": " 42 "}])[0].navigation_item_id == 42

    def test_rejects_non_list_children(self) -> None:
        with pytest.raises(InvalidStructure):
            parse_forest([{"navigationItemId": 1, "items": {"navigationItemId": 2}}])

    def test_rejects_item_as_its_own_child(self) -> None:
        with pytest.raises(InvalidStructure):
            parse_forest([{"navigationItemId": 1, "items": [{"navigationItemId": 1}]}])

    def test_rejects_item_as_deep_descendant(self) -> None:
        raw = [{"navigationItemId": 1, "items": [
            {"navigationItemId": 2, "items": [
                {"navigationItemId": 3, "items": [{"navigationItemId": 1}]},
            ]},
        ]}]

        with pytest.raises(InvalidStructure):
            parse_forest(raw)

    def test_same_item_in_separate_branches_is_allowed(self) -> None:
        forest = parse_forest([
            {"navigationItemId": 1, "items": [{"navigationItemId": 3}]},
            {"navigationItemId": 2, "items": [{"navigationItemId": 3}]},
        ])

        assert collect_item_ids(forest) == [1, 3, 2]


class TestForestHelpers:
    """Tests for collect_item_ids() and filter_forest()."""

    def test_collect_item_ids_is_depth_first(self) -> None:
        forest = parse_forest([
            {"navigationItemId": 10, "items": [
                {"navigationItemId": 11, "items": [{"navigationItemId": 12}]},
            ]},
            {"navigationItemId": 20},
        ])

        assert collect_item_ids(forest) == [10, 11, 12, 20]

    def test_filter_forest_drops_subtrees(self) -> None:
        forest = parse_forest([
            {"navigationItemId": 1, "items": [
                {"navigationItemId": 2, "isSecondary": True, "items": [{"navigationItemId": 3}]},
                {"navigationItemId": 4},
            ]},
        ])

        filtered = filter_forest(forest, lambda node: not node.is_secondary)

        assert collect_item_ids(filtered) == [1, 4]
        # the input forest is untouched
        assert collect_item_ids(forest) == [1, 2, 3, 4]
