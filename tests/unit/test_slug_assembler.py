"""Unit tests for per-locale slug assembly."""

from __future__ import annotations

import asyncio

from betterslugs.text.assembler import SlugAssembler
from betterslugs.text.pattern import parse_pattern

_ARTICLE = {
    "category": {"en-US": "News & Views", "de-DE": "Nachrichten & Meinungen"},
    "title": {"en-US": "Hello World!", "de-DE": "Hallo Welt!"},
}


def _assemble(host, source: str, locale: str, **options: object) -> str:
    assembler = SlugAssembler(parse_pattern(source), host, **options)
    return asyncio.run(assembler.assemble(locale))


def test_assemble_omits_default_locale_by_default(host_factory) -> None:
    """Default-locale slugs should not carry the locale marker."""

    host = host_factory(_ARTICLE)

    slug = _assemble(host, "[field:category]/[field:title]/[locale]", "en-US")

    assert slug == "news-views/hello-world"


def test_assemble_appends_non_default_locale(host_factory) -> None:
    """Non-default locales should always render the locale marker."""

    host = host_factory(_ARTICLE)

    slug = _assemble(host, "[field:category]/[field:title]/[locale]", "de-DE")

    assert slug == "nachrichten-meinungen/hallo-welt/de-DE"


def test_assemble_shows_default_locale_when_enabled(host_factory) -> None:
    """The display-default-locale option should render the default locale too."""

    host = host_factory(_ARTICLE)

    slug = _assemble(
        host, "[locale]/[field:title]", "en-US", display_default_locale=True
    )

    assert slug == "en-US/hello-world"


def test_assemble_uses_default_value_for_fields_without_the_locale(host_factory) -> None:
    """Fields that do not hold the locale should contribute their default value."""

    host = host_factory(
        {"title": {"en-US": "Hello World!"}},
        field_locales={"title": ("en-US",)},
    )

    assert _assemble(host, "[field:title]/[locale]", "de-DE") == "hello-world/de-DE"


def test_assemble_missing_fields_collapse_to_single_separators(host_factory) -> None:
    """Unknown fields resolve to empty parts that separator collapsing removes."""

    host = host_factory(_ARTICLE)

    assert _assemble(host, "blog/[field:missing]/[field:title]", "en-US") == "blog/hello-world"


def test_assemble_separator_collapse_modes_differ_on_repeated_gaps(host_factory) -> None:
    """Legacy collapsing should only fix the first doubled separator."""

    host = host_factory({})
    source = "[field:a]/[field:b]/[field:c]/end"

    assert _assemble(host, source, "en-US") == "/end"
    assert _assemble(host, source, "en-US", legacy_separator_collapse=True) == "//end"


def test_assemble_resolves_reference_tokens(host_factory) -> None:
    """Reference tokens should slugify the linked record's sub-field."""

    host = host_factory(
        {
            "author": {"en-US": {"sys": {"id": "a1"}}, "de-DE": {"sys": {"id": "a1"}}},
            "title": _ARTICLE["title"],
        },
        entries={"a1": {"fields": {"name": {"en-US": "Jane Doe"}}}},
    )

    slug = _assemble(host, "[field:author:name]/[field:title]/[locale]", "de-DE")

    assert slug == "jane-doe/hallo-welt/de-DE"


def test_assemble_trims_injected_slugify_output(host_factory) -> None:
    """Output of a custom slugify should lose trailing hyphens and U+FE0F."""

    host = host_factory({"title": {"en-US": "Stars \u2b50\ufe0f"}})

    slug = _assemble(
        host,
        "[field:title]",
        "en-US",
        slugify=lambda value: value.replace(" ", "-") + "-",
    )

    assert slug == "Stars-\u2b50"


def test_assemble_literal_only_pattern_is_static(host_factory) -> None:
    """Patterns without field tokens should render their literals."""

    host = host_factory({})

    assert _assemble(host, "static/page/", "en-US") == "static/page"
    assert _assemble(host, "static/[locale]", "de-DE") == "static/de-DE"


def test_assemble_link_valued_local_token_renders_empty(host_factory) -> None:
    """A reference field used without a sub-field should not leak its link payload."""

    host = host_factory(
        {
            "author": {"en-US": {"sys": {"type": "Link", "linkType": "Entry", "id": "a1"}}},
            "title": {"en-US": "Hello World!"},
        }
    )

    assert _assemble(host, "[field:author]", "en-US") == ""
    assert _assemble(host, "posts/[field:author]/[field:title]", "en-US") == "posts/hello-world"
    assert host.fetched_entry_ids == []


def test_assemble_joins_list_values(host_factory) -> None:
    """Multi-value text fields should contribute their items as one part."""

    host = host_factory({"tags": {"en-US": ["Cats", "Dogs"]}})

    assert _assemble(host, "tagged/[field:tags]", "en-US") == "tagged/cats-dogs"
