"""Unit tests for slug primitives and separator normalization."""

from __future__ import annotations

import pytest

from betterslugs.text.slug import normalize_slug_path, slugify_text, trim_slug_part


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("News & Views", "news-views"),
        ("Hello World!", "hello-world"),
        ("Café à Paris", "cafe-a-paris"),
        ("  --Already-Slugged--  ", "already-slugged"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_slugify_text_produces_lowercase_ascii_slugs(raw: str, expected: str) -> None:
    """Default slugify should transliterate and hyphen-join alphanumeric runs."""

    assert slugify_text(raw) == expected


def test_trim_slug_part_strips_trailing_hyphens_and_presentation_selectors() -> None:
    """Trailing hyphen and U+FE0F runs should be removed, inner ones kept."""

    assert trim_slug_part("hello---") == "hello"
    assert trim_slug_part("hello-\ufe0f-") == "hello"
    assert trim_slug_part("stars-\u2b50\ufe0f") == "stars-\u2b50"
    assert trim_slug_part("a-b") == "a-b"
    assert trim_slug_part("-\ufe0f") == ""


def test_normalize_slug_path_collapses_every_doubled_separator() -> None:
    """Default mode should collapse all separator runs and drop one trailing slash."""

    assert normalize_slug_path("a//b///c/") == "a/b/c"
    assert normalize_slug_path("///end") == "/end"
    assert normalize_slug_path("news-views/hello-world") == "news-views/hello-world"


def test_normalize_slug_path_legacy_mode_collapses_first_occurrence_only() -> None:
    """Legacy mode should keep later doubled separators untouched."""

    assert normalize_slug_path("a//b///c/", legacy_separator_collapse=True) == "a/b///c"
    assert normalize_slug_path("///end", legacy_separator_collapse=True) == "//end"


@pytest.mark.parametrize("legacy", [False, True])
def test_normalize_slug_path_strips_a_single_trailing_separator(legacy: bool) -> None:
    """Both modes should remove one trailing separator."""

    assert normalize_slug_path("news/", legacy_separator_collapse=legacy) == "news"
    assert normalize_slug_path("news//", legacy_separator_collapse=legacy) == "news"
    assert normalize_slug_path("", legacy_separator_collapse=legacy) == ""
