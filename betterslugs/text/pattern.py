"""Slug pattern parsing.

Responsibilities:
- Split slash-delimited patterns such as `[field:title]/[locale]` into segments.
- Classify tokens as field, reference-field, locale, or literal segments.

Parsing is total: malformed tokens become literals or field tokens that
resolve to empty values at compute time.
"""

from __future__ import annotations

import re

from ..models.datatypes import FieldToken, LiteralSegment, LocaleToken, Segment, SlugPattern

_BRACKETS_RE = re.compile(r"[\[\]]")
_FIELD_PREFIX = "field:"
_LOCALE_TOKEN = "locale"


def _classify(part: str) -> Segment:
    """Classify one bracket-stripped pattern part."""

    if part.startswith(_FIELD_PREFIX):
        names = part[len(_FIELD_PREFIX):].split(":")
        if len(names) == 1:
            return FieldToken(field_name=names[0].strip())
        return FieldToken(field_name=names[0].strip(), sub_field_name=names[1].strip())
    if part == _LOCALE_TOKEN:
        return LocaleToken()
    return LiteralSegment(text=part)


def parse_pattern(pattern: str | None) -> SlugPattern:
    """Parse a slug pattern string into ordered typed segments."""

    source = pattern or ""
    parts = [_BRACKETS_RE.sub("", part).strip() for part in source.split("/")]
    return SlugPattern(source=source, segments=tuple(_classify(part) for part in parts))
