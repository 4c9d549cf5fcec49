"""Host capability interfaces consumed by the slug engine.

The engine never talks to an editor SDK directly; it depends only on these
protocols. Implementations live in sibling modules.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from ..models.datatypes import LocaleSettings, RecordSys

ValueListener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class EntryField(Protocol):
    """Localized field accessor on the record being edited."""

    id: str

    @property
    def locales(self) -> Sequence[str]:
        """Return locale codes this field holds values in."""

    def get_value(self, locale: str | None = None) -> Any:
        """Return the raw value at a locale, or `None` when unset."""

    async def set_value(self, value: Any, locale: str | None = None) -> Any:
        """Persist a value at a locale."""

    async def remove_value(self, locale: str | None = None) -> None:
        """Remove the value at a locale."""

    def on_value_changed(self, locale: str, callback: ValueListener) -> Unsubscribe:
        """Subscribe to value changes at a locale."""


class SlugField(Protocol):
    """The slug field bound to the active editing locale."""

    id: str
    locale: str

    def get_value(self) -> Any:
        """Return the slug value at the active locale."""

    async def set_value(self, value: Any) -> Any:
        """Persist the slug value at the active locale."""

    async def remove_value(self) -> None:
        """Remove the slug value at the active locale."""

    def on_value_changed(self, callback: ValueListener) -> Unsubscribe:
        """Subscribe to slug changes, including ones written by other sessions."""


class SlugHost(Protocol):
    """Record-store capabilities supplied by the hosting editor."""

    locales: LocaleSettings
    field: SlugField

    def entry_fields(self) -> Mapping[str, EntryField]:
        """Return the record's fields keyed by field id."""

    def entry_sys(self) -> RecordSys:
        """Return current record lifecycle metadata."""

    async def get_entry(self, entry_id: str) -> Mapping[str, Any]:
        """Fetch a linked record payload with a `fields` mapping."""
