"""Shared pytest fixtures for the BetterSlugs test suite."""

from __future__ import annotations

import io
from typing import Any, Callable, Iterator, Mapping

import pytest

from betterslugs.host.memory import EntryFetcher, InMemoryField, InMemoryHost
from betterslugs.models.datatypes import LocaleSettings, RecordSys
from betterslugs.telemetry.logger import SlugLogger

HostFactory = Callable[..., InMemoryHost]


def _build_host(
    fields: Mapping[str, Mapping[str, Any]] | None = None,
    *,
    default_locale: str = "en-US",
    locales: tuple[str, ...] = ("en-US", "de-DE"),
    field_locales: Mapping[str, tuple[str, ...]] | None = None,
    slug_field_id: str = "slug",
    slug_locale: str | None = None,
    sys: RecordSys | None = None,
    entries: Mapping[str, Mapping[str, Any]] | None = None,
    entry_fetcher: EntryFetcher | None = None,
) -> InMemoryHost:
    """Build an in-memory host; fields hold values in every locale unless overridden."""

    overrides = field_locales or {}
    host_fields = {
        name: InMemoryField(
            name,
            overrides.get(name, locales),
            values=values,
            default_locale=default_locale,
        )
        for name, values in (fields or {}).items()
    }
    if slug_field_id not in host_fields:
        host_fields[slug_field_id] = InMemoryField(
            slug_field_id, locales, default_locale=default_locale
        )
    return InMemoryHost(
        locales=LocaleSettings(default=default_locale, available=locales),
        fields=host_fields,
        slug_field_id=slug_field_id,
        slug_locale=slug_locale,
        sys=sys,
        entries=entries,
        entry_fetcher=entry_fetcher,
    )


@pytest.fixture
def host_factory() -> HostFactory:
    """Provide a builder for in-memory hosts with localized field values."""

    return _build_host


@pytest.fixture
def log_sink() -> Iterator[tuple[SlugLogger, io.StringIO]]:
    """Provide a slug logger writing DEBUG-and-above lines into a string buffer."""

    buffer = io.StringIO()
    logger = SlugLogger(sink=buffer, level="DEBUG")
    yield logger, buffer
    logger.close()
