"""In-process record store implementing the host protocols.

Responsibilities:
- Hold localized field values and notify per-locale change listeners.
- Serve linked entries from a local mapping or an injected fetcher.
- Build a host from a record snapshot mapping (YAML/JSON payloads).
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Mapping

from ..errors import RecordFetchError
from ..models.datatypes import LocaleSettings, RecordSys
from .protocols import Unsubscribe, ValueListener

EntryFetcher = Callable[[str], Awaitable[Mapping[str, Any]]]


class InMemoryField:
    """Localized field with per-locale change listeners."""

    def __init__(
        self,
        field_id: str,
        locales: Iterable[str],
        values: Mapping[str, Any] | None = None,
        default_locale: str | None = None,
    ) -> None:
        self.id = field_id
        self._locales = tuple(locales)
        self._default_locale = default_locale or (self._locales[0] if self._locales else "")
        self._values: dict[str, Any] = dict(values or {})
        self._listeners: dict[str, list[ValueListener]] = {}
        self.writes: list[tuple[str, Any]] = []

    @property
    def locales(self) -> tuple[str, ...]:
        return self._locales

    def get_value(self, locale: str | None = None) -> Any:
        return self._values.get(locale or self._default_locale)

    async def set_value(self, value: Any, locale: str | None = None) -> Any:
        target = locale or self._default_locale
        self._values[target] = value
        self.writes.append((target, value))
        self._notify(target, value)
        return value

    async def remove_value(self, locale: str | None = None) -> None:
        target = locale or self._default_locale
        self._values.pop(target, None)
        self.writes.append((target, None))
        self._notify(target, None)

    def on_value_changed(self, locale: str, callback: ValueListener) -> Unsubscribe:
        listeners = self._listeners.setdefault(locale, [])
        listeners.append(callback)

        def _unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return _unsubscribe

    def listener_count(self, locale: str | None = None) -> int:
        """Return active listener count for one locale, or across all locales."""

        if locale is not None:
            return len(self._listeners.get(locale, []))
        return sum(len(listeners) for listeners in self._listeners.values())

    def _notify(self, locale: str, value: Any) -> None:
        for listener in list(self._listeners.get(locale, [])):
            listener(value)


class InMemorySlugField:
    """Slug field view bound to one locale of an `InMemoryField`."""

    def __init__(self, entry_field: InMemoryField, locale: str) -> None:
        self.id = entry_field.id
        self.locale = locale
        self._entry_field = entry_field

    def get_value(self) -> Any:
        return self._entry_field.get_value(self.locale)

    async def set_value(self, value: Any) -> Any:
        return await self._entry_field.set_value(value, self.locale)

    async def remove_value(self) -> None:
        await self._entry_field.remove_value(self.locale)

    def on_value_changed(self, callback: ValueListener) -> Unsubscribe:
        return self._entry_field.on_value_changed(self.locale, callback)


class InMemoryHost:
    """Complete in-process host for previews and tests."""

    def __init__(
        self,
        *,
        locales: LocaleSettings,
        fields: Mapping[str, InMemoryField],
        slug_field_id: str,
        slug_locale: str | None = None,
        sys: RecordSys | None = None,
        entries: Mapping[str, Mapping[str, Any]] | None = None,
        entry_fetcher: EntryFetcher | None = None,
    ) -> None:
        if slug_field_id not in fields:
            raise ValueError(f"Slug field `{slug_field_id}` is not a field of the record.")
        self.locales = locales
        self._fields = dict(fields)
        self.field = InMemorySlugField(self._fields[slug_field_id], slug_locale or locales.default)
        self.sys = sys or RecordSys(version=1)
        self.entries: dict[str, Mapping[str, Any]] = dict(entries or {})
        self._entry_fetcher = entry_fetcher
        self.fetched_entry_ids: list[str] = []

    def entry_fields(self) -> Mapping[str, InMemoryField]:
        return self._fields

    def entry_sys(self) -> RecordSys:
        return self.sys

    async def get_entry(self, entry_id: str) -> Mapping[str, Any]:
        self.fetched_entry_ids.append(entry_id)
        if self._entry_fetcher is not None:
            return await self._entry_fetcher(entry_id)
        if entry_id not in self.entries:
            raise RecordFetchError(
                f"Entry `{entry_id}` was not found.",
                entry_id=entry_id,
                failure_kind="not_found",
                status_code=404,
            )
        return self.entries[entry_id]

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, Any],
        *,
        entry_fetcher: EntryFetcher | None = None,
    ) -> "InMemoryHost":
        """Build a host from a record snapshot.

        Expected keys: `locales` (`default`, `available`), `sys`, `slug_field`
        (field id string, or mapping with `id` and `locale`), `fields` (field id
        to locale/value mapping), optional `entries` (entry id to payload), and
        optional `non_localized_fields` (field ids holding only the default
        locale). Other fields hold every available locale.

        Raises:
            ValueError: If required keys are missing or malformed.
        """

        locales = _locale_settings(payload.get("locales"))
        raw_fields = payload.get("fields") or {}
        if not isinstance(raw_fields, Mapping):
            raise ValueError("Record snapshot `fields` must be a mapping/object.")

        slug_field_id, slug_locale = _slug_field_binding(payload.get("slug_field"))
        single_locale = {str(name) for name in payload.get("non_localized_fields") or ()}
        fields: dict[str, InMemoryField] = {}
        for field_id, values in raw_fields.items():
            if values is None:
                values = {}
            if not isinstance(values, Mapping):
                raise ValueError(
                    f"Record snapshot field `{field_id}` must map locales to values."
                )
            fields[str(field_id)] = InMemoryField(
                str(field_id),
                (locales.default,) if str(field_id) in single_locale else locales.available,
                values={str(locale): value for locale, value in values.items()},
                default_locale=locales.default,
            )
        if slug_field_id not in fields:
            fields[slug_field_id] = InMemoryField(
                slug_field_id, locales.available, default_locale=locales.default
            )

        raw_sys = payload.get("sys") or {}
        if not isinstance(raw_sys, Mapping):
            raise ValueError("Record snapshot `sys` must be a mapping/object.")
        raw_entries = payload.get("entries") or {}
        if not isinstance(raw_entries, Mapping):
            raise ValueError("Record snapshot `entries` must be a mapping/object.")

        return cls(
            locales=locales,
            fields=fields,
            slug_field_id=slug_field_id,
            slug_locale=slug_locale,
            sys=RecordSys.from_mapping(raw_sys),
            entries={str(key): value for key, value in raw_entries.items()},
            entry_fetcher=entry_fetcher,
        )


def _locale_settings(raw: object) -> LocaleSettings:
    """Read locale settings from a snapshot `locales` value."""

    if not isinstance(raw, Mapping):
        raise ValueError("Record snapshot requires a `locales` mapping with `default`.")
    default = raw.get("default")
    if not isinstance(default, str) or not default.strip():
        raise ValueError("Record snapshot `locales.default` must be a non-empty string.")
    available = raw.get("available") or [default]
    if isinstance(available, str) or not isinstance(available, Iterable):
        raise ValueError("Record snapshot `locales.available` must be a list of locales.")
    codes = [str(locale).strip() for locale in available]
    if default.strip() not in codes:
        codes.insert(0, default.strip())
    return LocaleSettings(default=default.strip(), available=tuple(codes))


def _slug_field_binding(raw: object) -> tuple[str, str | None]:
    """Read the slug field id and optional active locale."""

    if isinstance(raw, str) and raw.strip():
        return raw.strip(), None
    if isinstance(raw, Mapping):
        field_id = raw.get("id")
        if isinstance(field_id, str) and field_id.strip():
            locale = raw.get("locale")
            return field_id.strip(), str(locale).strip() if locale else None
    raise ValueError("Record snapshot requires `slug_field` (field id or `{id, locale}`).")
