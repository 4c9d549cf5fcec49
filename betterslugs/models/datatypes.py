"""Core datatypes shared across slug computation modules.

Responsibilities:
- Represent the parsed slug pattern as immutable typed segments.
- Represent host-provided record lifecycle and locale metadata.

Key types:
- `LiteralSegment`, `FieldToken`, `LocaleToken`, and the `Segment` union.
- `SlugPattern`, `RecordSys`, and `LocaleSettings`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """Pattern text emitted verbatim.

    Attributes:
        text: Literal text, possibly empty for consecutive separators.
    """

    text: str


@dataclass(frozen=True, slots=True)
class FieldToken:
    """Pattern token copying a local field or a sub-field of a linked record.

    Attributes:
        field_name: Local field name, or the reference field name when
            `sub_field_name` is set.
        sub_field_name: Field to read on the linked record, if any.
    """

    field_name: str
    sub_field_name: str | None = None

    @property
    def is_reference(self) -> bool:
        """Return whether this token reads through a reference field."""

        return self.sub_field_name is not None


@dataclass(frozen=True, slots=True)
class LocaleToken:
    """Pattern token emitting the current locale code."""


Segment = Union[LiteralSegment, FieldToken, LocaleToken]


@dataclass(frozen=True, slots=True)
class SlugPattern:
    """Parsed slug pattern.

    Attributes:
        source: Original pattern string.
        segments: Ordered segments in output order.
    """

    source: str
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def field_tokens(self) -> tuple[FieldToken, ...]:
        """Return field tokens in pattern order."""

        return tuple(segment for segment in self.segments if isinstance(segment, FieldToken))

    def watched_field_names(self) -> tuple[str, ...]:
        """Return distinct local field names whose changes affect the slug."""

        names: list[str] = []
        for token in self.field_tokens:
            if token.field_name and token.field_name not in names:
                names.append(token.field_name)
        return tuple(names)


@dataclass(frozen=True, slots=True)
class RecordSys:
    """Read-only record lifecycle counters.

    Attributes:
        version: Current record version.
        published_version: Last published version, or `None` if never published.
    """

    version: int
    published_version: int | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RecordSys":
        """Build lifecycle metadata from a host `sys` payload."""

        version = payload.get("version", 0)
        published = payload.get("publishedVersion", payload.get("published_version"))
        return cls(
            version=int(version or 0),
            published_version=int(published) if published is not None else None,
        )


@dataclass(frozen=True, slots=True)
class LocaleSettings:
    """Locale list and designated default locale of the host space.

    Attributes:
        default: Default locale code.
        available: All locale codes, default included.
    """

    default: str
    available: tuple[str, ...] = field(default_factory=tuple)
