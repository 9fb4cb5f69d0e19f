# backend/navigation/translations.py
from typing import Iterable, Mapping

from .data import ContentEntry


def resolve(content: Iterable[ContentEntry | Mapping], language: str | None) -> str | None:
    """
    Return the value whose language exactly matches `language`.

    No fallback chain: a missing translation is None and the caller decides
    what to show instead (e.g. the shop's default language).
    """
    if not language:
        return None

    for entry in content or ():
        if isinstance(entry, ContentEntry):
            entry_language, value = entry.language, entry.value
        else:
            entry_language, value = entry.get("language"), entry.get("value")
        if entry_language == language:
            return value

    return None
