# backend/navigation/pagination.py
"""
Cursor pagination over querysets.

`first`/`after` pages forward and `last`/`before` pages backward. Rows are
ordered by the sort key with the primary key as tie-breaker, so cursors stay
stable when new rows are inserted. Cursors are opaque: url-safe base64 of
the sort value and primary key of the row they point at.
"""
import base64
import json
from dataclasses import dataclass, field
from typing import Any

from django.conf import settings
from django.db.models import Q, QuerySet
from django.utils.dateparse import parse_datetime
from rest_framework.exceptions import ValidationError

SORT_BY_ID = "id"
SORT_BY_CREATED_AT = "createdAt"
SORT_FIELDS = {
    SORT_BY_ID: "id",
    SORT_BY_CREATED_AT: "created_at",
}

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_ORDERS = (SORT_ASC, SORT_DESC)


@dataclass
class PageInfo:
    has_next_page: bool = False
    has_previous_page: bool = False
    start_cursor: str | None = None
    end_cursor: str | None = None


@dataclass
class Page:
    nodes: list[Any] = field(default_factory=list)
    total_count: int = 0
    page_info: PageInfo = field(default_factory=PageInfo)
    sort_by: str = SORT_BY_CREATED_AT

    def edges(self) -> list[tuple[str, Any]]:
        return [(encode_cursor(node, self.sort_by), node) for node in self.nodes]


def _sort_value(obj, sort_by: str):
    value = getattr(obj, SORT_FIELDS[sort_by])
    if sort_by == SORT_BY_CREATED_AT:
        return value.isoformat()
    return value


def encode_cursor(obj, sort_by: str) -> str:
    payload = json.dumps({"v": _sort_value(obj, sort_by), "pk": obj.pk}, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str, sort_by: str) -> tuple[Any, Any]:
    try:
        payload = json.loads(base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8"))
        value, pk = payload["v"], payload["pk"]
    except (ValueError, TypeError, KeyError, UnicodeError):
        raise ValidationError({"cursor": "Invalid cursor."})

    if sort_by == SORT_BY_CREATED_AT:
        value = parse_datetime(value) if isinstance(value, str) else None
        if value is None:
            raise ValidationError({"cursor": "Invalid cursor."})
    return value, pk


def _after_filter(sort_by: str, cursor_value, cursor_pk, ascending: bool) -> Q:
    """Rows strictly after the cursor row in the given direction."""
    op = "gt" if ascending else "lt"
    if sort_by == SORT_BY_ID:
        return Q(**{f"pk__{op}": cursor_pk})
    name = SORT_FIELDS[sort_by]
    return Q(**{f"{name}__{op}": cursor_value}) | Q(**{name: cursor_value, f"pk__{op}": cursor_pk})


def _ordering(sort_by: str, ascending: bool) -> list[str]:
    prefix = "" if ascending else "-"
    if sort_by == SORT_BY_ID:
        return [f"{prefix}pk"]
    return [f"{prefix}{SORT_FIELDS[sort_by]}", f"{prefix}pk"]


def _check_limit(name: str, value, max_limit: int) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError({name: "Must be an integer."})
    if value < 1 or value > max_limit:
        raise ValidationError({name: f"Must be between 1 and {max_limit}."})
    return value


def paginate(
    queryset: QuerySet,
    *,
    first: int | None = None,
    last: int | None = None,
    after: str | None = None,
    before: str | None = None,
    sort_by: str = SORT_BY_CREATED_AT,
    sort_order: str = SORT_ASC,
    max_limit: int | None = None,
) -> Page:
    if sort_by not in SORT_FIELDS:
        raise ValidationError({"sortBy": f"Must be one of: {', '.join(SORT_FIELDS)}."})
    if sort_order not in SORT_ORDERS:
        raise ValidationError({"sortOrder": f"Must be one of: {', '.join(SORT_ORDERS)}."})
    if first is not None and last is not None:
        raise ValidationError("Use either 'first' or 'last', not both.")
    if first is not None and before:
        raise ValidationError("'first' pairs with 'after', not 'before'.")
    if last is not None and after:
        raise ValidationError("'last' pairs with 'before', not 'after'.")

    max_limit = max_limit or settings.NAVIGATION_MAX_PAGE_SIZE
    first = _check_limit("first", first, max_limit)
    last = _check_limit("last", last, max_limit)
    if first is None and last is None:
        if before:
            last = min(settings.NAVIGATION_DEFAULT_PAGE_SIZE, max_limit)
        else:
            first = min(settings.NAVIGATION_DEFAULT_PAGE_SIZE, max_limit)

    ascending = sort_order == SORT_ASC
    total_count = queryset.count()

    if last is not None:
        if before:
            value, pk = decode_cursor(before, sort_by)
            queryset = queryset.filter(_after_filter(sort_by, value, pk, not ascending))
        rows = list(queryset.order_by(*_ordering(sort_by, not ascending))[: last + 1])
        has_previous = len(rows) > last
        rows = rows[:last]
        rows.reverse()
        page_info = PageInfo(has_next_page=bool(before), has_previous_page=has_previous)
    else:
        if after:
            value, pk = decode_cursor(after, sort_by)
            queryset = queryset.filter(_after_filter(sort_by, value, pk, ascending))
        rows = list(queryset.order_by(*_ordering(sort_by, ascending))[: first + 1])
        has_next = len(rows) > first
        rows = rows[:first]
        page_info = PageInfo(has_next_page=has_next, has_previous_page=bool(after))

    if rows:
        page_info.start_cursor = encode_cursor(rows[0], sort_by)
        page_info.end_cursor = encode_cursor(rows[-1], sort_by)

    return Page(nodes=rows, total_count=total_count, page_info=page_info, sort_by=sort_by)
