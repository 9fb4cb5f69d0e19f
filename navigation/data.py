# backend/navigation/data.py
"""
Value types stored inside navigation JSON columns.

`NavigationItemData` is the versioned payload of a navigation item (one copy
for the draft, one for the published state). `NavigationTreeItem` is a
structural node of a tree forest; every node owns its children by value.

Both are frozen: an edit builds a new value, and converting to and from JSON
is how the stores copy them.
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Iterator, Mapping

from .exceptions import InvalidStructure


@dataclass(frozen=True)
class ContentEntry:
    language: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"language": self.language, "value": self.value}


@dataclass(frozen=True)
class NavigationItemData:
    content: tuple[ContentEntry, ...] = ()
    class_names: str | None = None
    url: str | None = None
    is_url_relative: bool = True
    should_open_in_new_window: bool = False

    def __post_init__(self):
        languages = [entry.language for entry in self.content]
        if len(languages) != len(set(languages)):
            raise ValueError("Each content language may only appear once.")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NavigationItemData":
        if not isinstance(data, Mapping):
            raise ValueError(f"Navigation item data must be an object, not {type(data).__name__}.")
        try:
            content = tuple(
                entry if isinstance(entry, ContentEntry)
                else ContentEntry(language=entry["language"], value=entry["value"])
                for entry in data.get("content") or ()
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed content entry: {exc}") from exc
        return cls(
            content=content,
            class_names=data.get("classNames"),
            url=data.get("url"),
            is_url_relative=bool(data.get("isUrlRelative", True)),
            should_open_in_new_window=bool(data.get("shouldOpenInNewWindow", False)),
        )

    @classmethod
    def coerce(cls, value) -> "NavigationItemData | None":
        if value is None or isinstance(value, cls):
            return value
        return cls.from_dict(value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [entry.to_dict() for entry in self.content],
            "classNames": self.class_names,
            "url": self.url,
            "isUrlRelative": self.is_url_relative,
            "shouldOpenInNewWindow": self.should_open_in_new_window,
        }

    def with_content(self, language: str, value: str) -> "NavigationItemData":
        """Return a copy with `language` set to `value`, keeping entry order."""
        entries = list(self.content)
        for idx, entry in enumerate(entries):
            if entry.language == language:
                entries[idx] = ContentEntry(language, value)
                break
        else:
            entries.append(ContentEntry(language, value))
        return replace(self, content=tuple(entries))


@dataclass(frozen=True)
class NavigationTreeItem:
    navigation_item_id: int
    expanded: bool = False
    is_visible: bool = True
    is_private: bool = False
    is_secondary: bool = False
    items: tuple["NavigationTreeItem", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "navigationItemId": self.navigation_item_id,
            "expanded": self.expanded,
            "isVisible": self.is_visible,
            "isPrivate": self.is_private,
            "isSecondary": self.is_secondary,
            "items": [child.to_dict() for child in self.items],
        }

    def walk(self) -> Iterator["NavigationTreeItem"]:
        yield self
        for child in self.items:
            yield from child.walk()


Forest = tuple[NavigationTreeItem, ...]

# largest value a BigAutoField primary key can hold
MAX_ITEM_ID = 2**63 - 1


def _parse_item_id(raw) -> int:
    # bool is an int subclass; True is not a navigation item id
    if isinstance(raw, int) and not isinstance(raw, bool):
        item_id = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdecimal():
        item_id = int(raw)
    else:
        raise InvalidStructure(f"Invalid navigationItemId: {raw!r}.")
    if not 1 <= item_id <= MAX_ITEM_ID:
        raise InvalidStructure(f"navigationItemId out of range: {raw!r}.")
    return item_id


def _parse_node(raw, ancestors: frozenset) -> NavigationTreeItem:
    if isinstance(raw, NavigationTreeItem):
        raw = raw.to_dict()
    if not isinstance(raw, dict):
        raise InvalidStructure("Each navigation tree item must be an object.")
    if "navigationItemId" not in raw:
        raise InvalidStructure("Navigation tree item is missing navigationItemId.")

    item_id = _parse_item_id(raw["navigationItemId"])
    if item_id in ancestors:
        raise InvalidStructure(
            f"Navigation item {item_id} appears as its own descendant."
        )

    children = raw.get("items") or []
    if not isinstance(children, (list, tuple)):
        raise InvalidStructure("Navigation tree item 'items' must be a list.")

    return NavigationTreeItem(
        navigation_item_id=item_id,
        expanded=bool(raw.get("expanded", False)),
        is_visible=bool(raw.get("isVisible", True)),
        is_private=bool(raw.get("isPrivate", False)),
        is_secondary=bool(raw.get("isSecondary", False)),
        items=tuple(_parse_node(child, ancestors | {item_id}) for child in children),
    )


def parse_forest(raw) -> Forest:
    """
    Build a forest from JSON-like input.

    Raises InvalidStructure for malformed nodes, and for cycles, i.e. a
    navigation item appearing among its own ancestors.
    """
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise InvalidStructure("Navigation tree items must be a list.")
    return tuple(_parse_node(node, frozenset()) for node in raw)


def forest_to_json(forest: Iterable[NavigationTreeItem]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in forest]


def walk_forest(forest: Iterable[NavigationTreeItem]) -> Iterator[NavigationTreeItem]:
    for node in forest:
        yield from node.walk()


def collect_item_ids(forest: Iterable[NavigationTreeItem]) -> list[int]:
    """Navigation item ids reachable from `forest`, in depth-first order, unique."""
    seen = {}
    for node in walk_forest(forest):
        seen.setdefault(node.navigation_item_id, None)
    return list(seen)


def filter_forest(
    forest: Iterable[NavigationTreeItem],
    keep: Callable[[NavigationTreeItem], bool],
) -> Forest:
    """Drop nodes (with their subtrees) for which `keep` is false."""
    return tuple(
        replace(node, items=filter_forest(node.items, keep))
        for node in forest
        if keep(node)
    )
