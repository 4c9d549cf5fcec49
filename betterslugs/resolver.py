"""Reference-field resolution with locale fallback.

Responsibilities:
- Read the link stored on a local reference field.
- Fetch the linked record and read one sub-field with
  requested-locale, default-locale, empty-string fallback.
"""

from __future__ import annotations

from typing import Any, Mapping

from .host.protocols import SlugHost
from .parsing import coerce_text


def _link_id(link: Any) -> str | None:
    """Extract an entry id from a link payload or a bare id string."""

    if isinstance(link, str):
        return link.strip() or None
    if isinstance(link, Mapping):
        sys = link.get("sys")
        if isinstance(sys, Mapping) and sys.get("id"):
            return str(sys["id"])
    return None


class ReferenceResolver:
    """Resolve sub-field values on records linked from the edited record."""

    def __init__(self, host: SlugHost) -> None:
        self._host = host

    async def resolve(self, field_name: str, sub_field_name: str, locale: str) -> str:
        """Return the localized sub-field value of the linked record.

        Missing reference fields, empty links, missing sub-fields, and missing
        locales resolve to an empty string. Fetch failures propagate.
        """

        default_locale = self._host.locales.default
        reference_field = self._host.entry_fields().get(field_name)
        if reference_field is None:
            return ""

        reference_locale = locale if locale in reference_field.locales else default_locale
        entry_id = _link_id(reference_field.get_value(reference_locale))
        if entry_id is None:
            return ""

        entry = await self._host.get_entry(entry_id)
        fields = entry.get("fields") if isinstance(entry, Mapping) else None
        if not fields:
            return ""

        localized = fields.get(sub_field_name)
        if not isinstance(localized, Mapping):
            return ""
        if locale in localized:
            return coerce_text(localized[locale])
        if default_locale in localized:
            return coerce_text(localized[default_locale])
        return ""
