"""Slug string primitives.

Responsibilities:
- Provide the default transliterating slugify function used for field values.
- Trim per-part trailing separators and emoji presentation selectors.
- Normalize joined slug paths.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Callable

Slugifier = Callable[[str], str]

SEPARATOR = "/"

_TRAILING_PART_RE = re.compile("[-\ufe0f]+$")
_DOUBLED_SEPARATOR_RE = re.compile(r"/{2,}")
_TRAILING_SEPARATOR_RE = re.compile(r"/$")


def slugify_text(value: str) -> str:
    """Return a lowercase ASCII slug with hyphen-joined alphanumeric runs."""

    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    lowered = ascii_only.lower().strip()
    collapsed = re.sub(r"[^a-z0-9]+", "-", lowered)
    return collapsed.strip("-")


def trim_slug_part(value: str) -> str:
    """Strip a trailing run of hyphens and U+FE0F variation selectors."""

    return _TRAILING_PART_RE.sub("", value)


def normalize_slug_path(joined: str, *, legacy_separator_collapse: bool = False) -> str:
    """Collapse doubled separators and drop one trailing separator.

    In legacy mode only the first `//` occurrence is collapsed, matching the
    behavior of slugs written by earlier releases.
    """

    if legacy_separator_collapse:
        collapsed = joined.replace("//", SEPARATOR, 1)
    else:
        collapsed = _DOUBLED_SEPARATOR_RE.sub(SEPARATOR, joined)
    return _TRAILING_SEPARATOR_RE.sub("", collapsed, count=1)
