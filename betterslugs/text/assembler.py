"""Slug assembly for one locale.

Responsibilities:
- Walk parsed pattern segments and resolve each to a slug part.
- Slugify field values through an injected slugify function.
- Join parts and normalize separators.
"""

from __future__ import annotations

from ..host.protocols import SlugHost
from ..models.datatypes import FieldToken, LiteralSegment, LocaleToken, SlugPattern
from ..parsing import coerce_text
from ..resolver import ReferenceResolver
from .slug import SEPARATOR, Slugifier, normalize_slug_path, slugify_text, trim_slug_part


class SlugAssembler:
    """Render a parsed pattern into a normalized slug for a locale."""

    def __init__(
        self,
        pattern: SlugPattern,
        host: SlugHost,
        *,
        resolver: ReferenceResolver | None = None,
        slugify: Slugifier = slugify_text,
        display_default_locale: bool = False,
        legacy_separator_collapse: bool = False,
    ) -> None:
        self.pattern = pattern
        self._host = host
        self._resolver = resolver or ReferenceResolver(host)
        self._slugify = slugify
        self.display_default_locale = display_default_locale
        self.legacy_separator_collapse = legacy_separator_collapse

    async def assemble(self, locale: str) -> str:
        """Return the slug for `locale`.

        Raises:
            RecordFetchError: If a linked record cannot be fetched.
        """

        parts: list[str] = []
        for segment in self.pattern.segments:
            if isinstance(segment, LiteralSegment):
                parts.append(segment.text)
            elif isinstance(segment, FieldToken):
                raw = await self._field_text(segment, locale)
                parts.append(trim_slug_part(self._slugify(raw)))
            elif isinstance(segment, LocaleToken):
                if self._shows_locale(locale):
                    parts.append(locale)

        return normalize_slug_path(
            SEPARATOR.join(parts),
            legacy_separator_collapse=self.legacy_separator_collapse,
        )

    def _shows_locale(self, locale: str) -> bool:
        return locale != self._host.locales.default or self.display_default_locale

    async def _field_text(self, token: FieldToken, locale: str) -> str:
        if token.sub_field_name is not None:
            return await self._resolver.resolve(token.field_name, token.sub_field_name, locale)
        return self.local_value(token.field_name, locale)

    def local_value(self, field_name: str, locale: str) -> str:
        """Read a local field at `locale`, falling back to the default locale."""

        entry_field = self._host.entry_fields().get(field_name)
        if entry_field is None:
            return ""
        if locale in entry_field.locales:
            return coerce_text(entry_field.get_value(locale))
        return coerce_text(entry_field.get_value(self._host.locales.default))
