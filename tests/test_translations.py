"""Tests for the translation resolver."""

from navigation.data import ContentEntry
from navigation.translations import resolve


def test_returns_exact_language_match() -> None:
    content = [ContentEntry("en", "Home"), ContentEntry("de", "Startseite")]

    assert resolve(content, "de") == "Startseite"


def test_returns_none_without_match() -> None:
    content = [ContentEntry("en", "Home")]

    assert resolve(content, "fr") is None


def test_does_not_fall_back_to_language_prefix() -> None:
    content = [ContentEntry("en", "Home")]

    assert resolve(content, "en-US") is None


def test_accepts_raw_dicts() -> None:
    content = [{"language": "en", "value": "Home"}]

    assert resolve(content, "en") == "Home"


def test_empty_inputs() -> None:
    assert resolve([], "en") is None
    assert resolve(None, "en") is None
    assert resolve([ContentEntry("en", "Home")], None) is None
