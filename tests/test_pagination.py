"""Tests for cursor pagination."""

import pytest
from rest_framework.exceptions import ValidationError

from navigation.models import NavigationItem
from navigation.pagination import decode_cursor, encode_cursor, paginate

pytestmark = pytest.mark.django_db


@pytest.fixture
def items(shop, make_item):
    return [make_item(f"Item {i}") for i in range(5)]


def ids(page):
    return [item.pk for item in page.nodes]


def test_first_page_forward(shop, items) -> None:
    page = paginate(NavigationItem.objects.for_shop(shop), first=2)

    assert ids(page) == [items[0].pk, items[1].pk]
    assert page.total_count == 5
    assert page.page_info.has_next_page is True
    assert page.page_info.has_previous_page is False


def test_walks_forward_with_after(shop, items) -> None:
    qs = NavigationItem.objects.for_shop(shop)
    first = paginate(qs, first=2)

    second = paginate(qs, first=2, after=first.page_info.end_cursor)
    third = paginate(qs, first=2, after=second.page_info.end_cursor)

    assert ids(second) == [items[2].pk, items[3].pk]
    assert ids(third) == [items[4].pk]
    assert third.page_info.has_next_page is False
    assert third.page_info.has_previous_page is True


def test_walks_backward_with_before(shop, items) -> None:
    qs = NavigationItem.objects.for_shop(shop)
    last = paginate(qs, last=2)

    previous = paginate(qs, last=2, before=last.page_info.start_cursor)

    assert ids(last) == [items[3].pk, items[4].pk]
    assert last.page_info.has_previous_page is True
    assert last.page_info.has_next_page is False
    assert ids(previous) == [items[1].pk, items[2].pk]
    assert previous.page_info.has_next_page is True


def test_descending_by_id(shop, items) -> None:
    qs = NavigationItem.objects.for_shop(shop)
    first = paginate(qs, first=2, sort_by="id", sort_order="desc")

    second = paginate(qs, first=2, after=first.page_info.end_cursor, sort_by="id", sort_order="desc")

    assert ids(first) == [items[4].pk, items[3].pk]
    assert ids(second) == [items[2].pk, items[1].pk]


def test_cursor_stable_under_insertion(shop, items, make_item) -> None:
    qs = NavigationItem.objects.for_shop(shop)
    first = paginate(qs, first=2)

    make_item("Late arrival")
    second = paginate(qs, first=2, after=first.page_info.end_cursor)

    assert ids(second) == [items[2].pk, items[3].pk]


def test_default_page_size_applies(shop, items, settings) -> None:
    settings.NAVIGATION_DEFAULT_PAGE_SIZE = 3

    page = paginate(NavigationItem.objects.for_shop(shop))

    assert len(page.nodes) == 3


def test_empty_page_has_no_cursors(shop) -> None:
    page = paginate(NavigationItem.objects.for_shop(shop), first=10)

    assert page.nodes == []
    assert page.page_info.start_cursor is None
    assert page.page_info.end_cursor is None


def test_edges_pair_cursor_with_node(shop, items) -> None:
    page = paginate(NavigationItem.objects.for_shop(shop), first=2)

    cursor, item = page.edges()[1]

    assert item.pk == items[1].pk
    assert cursor == page.page_info.end_cursor


def test_cursor_round_trip(shop, items) -> None:
    item = items[0]

    value, pk = decode_cursor(encode_cursor(item, "createdAt"), "createdAt")

    assert value == item.created_at
    assert pk == item.pk


@pytest.mark.parametrize(
    "kwargs",
    [
        {"first": 1, "last": 1},
        {"first": 1, "before": "abc"},
        {"last": 1, "after": "abc"},
        {"first": 0},
        {"first": 51},
        {"sort_by": "name"},
        {"sort_order": "sideways"},
        {"after": "not-a-cursor"},
    ],
)
def test_rejects_invalid_arguments(shop, kwargs) -> None:
    with pytest.raises(ValidationError):
        paginate(NavigationItem.objects.for_shop(shop), **kwargs)


def test_explicit_max_limit_overrides_setting(shop, items) -> None:
    qs = NavigationItem.objects.for_shop(shop)

    with pytest.raises(ValidationError):
        paginate(qs, first=4, max_limit=3)

    assert len(paginate(qs, first=3, max_limit=3).nodes) == 3
    assert len(paginate(qs, max_limit=2).nodes) == 2
