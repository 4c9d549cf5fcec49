"""Integration-test fixtures for isolated CLI runs."""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_KEYS = (
    "BETTERSLUGS_PATTERN",
    "BETTERSLUGS_DISPLAY_DEFAULT_LOCALE",
    "BETTERSLUGS_LOCK_WHEN_PUBLISHED",
    "BETTERSLUGS_DEBOUNCE_SECONDS",
    "BETTERSLUGS_LEGACY_SEPARATOR_COLLAPSE",
    "CONTENTFUL_SPACE_ID",
    "CONTENTFUL_ACCESS_TOKEN",
    "CONTENTFUL_ENVIRONMENT",
    "CONTENTFUL_API_URL",
)

_RECORD_YAML = """
locales:
  default: en-US
  available: [en-US, de-DE]
sys:
  version: 7
  publishedVersion: 5
slug_field: slug
non_localized_fields: [author]
fields:
  category:
    en-US: News & Views
    de-DE: Nachrichten
  title:
    en-US: Hello World!
    de-DE: Hallo Welt!
  author:
    en-US: {sys: {type: Link, linkType: Entry, id: author-1}}
  slug:
    de-DE: handmade-slug
entries:
  author-1:
    fields:
      name:
        en-US: Jane Doe
""".lstrip()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove slug and Contentful environment variables for deterministic CLI runs."""

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def record_path(tmp_path: Path) -> Path:
    """Write a published two-locale record snapshot with one linked author."""

    path = tmp_path / "record.yaml"
    path.write_text(_RECORD_YAML, encoding="utf-8")
    return path
