from __future__ import annotations

import pytest

from pypoi.exceptions import EmptyLocaleSetError
from pypoi.locales import resolve_locale


def test_exact_match_is_returned_unchanged() -> None:
    assert resolve_locale("en-US-POSIX", {"en-US-POSIX", "en"}) == "en-US-POSIX"


def test_longest_prefix_wins() -> None:
    assert resolve_locale("en-US-POSIX", ["en", "en-US", "ca"]) == "en-US"


def test_shortens_to_language() -> None:
    assert resolve_locale("ca-ES", ["es", "ca"]) == "ca"


def test_underscore_separator_is_accepted() -> None:
    assert resolve_locale("es_ES", ["en", "es"]) == "es"


def test_no_match_falls_back_to_first_key() -> None:
    available = {"fr": {}, "de": {}}
    resolved = resolve_locale("ja-JP", available)
    assert resolved in available
    assert resolved == "fr"


def test_empty_available_set_raises() -> None:
    with pytest.raises(EmptyLocaleSetError):
        resolve_locale("en", [])


@pytest.mark.parametrize(
    ("requested", "available"),
    [
        ("x-y-z", ["x-y", "q"]),
        ("x-y-z", ["q", "x", "x-y"]),
    ],
)
def test_three_part_tag_resolves_to_two_part_prefix(requested: str, available: list[str]) -> None:
    assert resolve_locale(requested, available) == "x-y"
