"""Slug field controller wiring parser, scheduler, lock policy, and assembler.

Responsibilities:
- Derive watched fields from the pattern and attach listeners on mount.
- Recompute and write slugs per locale unless the publish lock applies.
- Apply manual edits and resets from the slug input.
- Mirror the current slug value for display.

Key types:
- `SlugFieldController`: one mounted slug field.
"""

from __future__ import annotations

from typing import Any

from .config import SlugFieldConfig
from .host.protocols import EntryField, SlugHost
from .lock_policy import is_locked
from .parsing import coerce_text
from .resolver import ReferenceResolver
from .scheduler import ChangeScheduler
from .telemetry.logger import SlugLogger
from .text.assembler import SlugAssembler
from .text.pattern import parse_pattern
from .text.slug import Slugifier, slugify_text


class SlugFieldController:
    """Keep one slug field synchronized with the fields its pattern references."""

    def __init__(
        self,
        host: SlugHost,
        config: SlugFieldConfig,
        *,
        slugify: Slugifier = slugify_text,
        logger: SlugLogger | None = None,
    ) -> None:
        config.validate()
        self.host = host
        self.config = config
        self.pattern = parse_pattern(config.pattern)
        self._logger = logger or SlugLogger()
        self.assembler = SlugAssembler(
            self.pattern,
            host,
            resolver=ReferenceResolver(host),
            slugify=slugify,
            display_default_locale=config.display_default_locale,
            legacy_separator_collapse=config.legacy_separator_collapse,
        )
        self.value = coerce_text(host.field.get_value())
        self._scheduler: ChangeScheduler | None = None
        self._generations: dict[str, int] = {}

    @property
    def mounted(self) -> bool:
        return self._scheduler is not None

    @property
    def scheduler(self) -> ChangeScheduler | None:
        return self._scheduler

    def mount(self) -> None:
        """Attach field and external-change listeners.

        Must be called from a running event loop.
        """

        if self._scheduler is not None:
            return
        scheduler = ChangeScheduler(
            self._recompute,
            delay_seconds=self.config.debounce_seconds,
            logger=self._logger,
        )
        watched = self._watched_fields()
        scheduler.watch_fields(watched)
        scheduler.watch_external(self.host.field, self._on_external_change)
        self._scheduler = scheduler
        self._logger.log_mounted(len(watched), scheduler.subscription_count)

    def unmount(self) -> None:
        """Release every listener, timer, and in-flight recomputation."""

        if self._scheduler is None:
            return
        self._scheduler.close()
        self._scheduler = None
        self._logger.log_unmounted()

    async def __aenter__(self) -> "SlugFieldController":
        self.mount()
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        self.unmount()

    async def update_slug(self, locale: str, force: bool = False) -> str | None:
        """Recompute and write the slug for `locale`.

        Returns the written slug, or `None` when the publish lock suppressed the
        write or a newer update for the same locale superseded this one.

        Raises:
            RecordFetchError: If a linked record cannot be fetched. Nothing is
                written in that case.
        """

        if not force and self.config.lock_when_published and self._holds_locked_slug(locale):
            self._logger.log_skipped(locale, "locked")
            return None

        generation = self._generations.get(locale, 0) + 1
        self._generations[locale] = generation

        slug = await self.assembler.assemble(locale)
        if self._generations.get(locale) != generation:
            self._logger.log_stale(locale)
            return None

        await self._slug_entry_field().set_value(slug, locale)
        self._logger.log_written(locale, slug, force)
        return slug

    async def reset(self) -> str | None:
        """Force-recompute the slug for the slug field's active locale."""

        return await self.update_slug(self.host.field.locale, force=True)

    async def apply_user_input(self, value: str) -> None:
        """Write a manually typed slug, or clear the field when emptied."""

        self.value = value
        # A manual edit supersedes any recomputation still awaiting a fetch.
        locale = self.host.field.locale
        self._generations[locale] = self._generations.get(locale, 0) + 1
        if value:
            await self.host.field.set_value(value)
        else:
            await self.host.field.remove_value()
        self._logger.log_user_input(locale, cleared=not value)

    def _holds_locked_slug(self, locale: str) -> bool:
        if not is_locked(self.host.entry_sys()):
            return False
        return bool(self._slug_entry_field().get_value(locale))

    def _slug_entry_field(self) -> EntryField:
        return self.host.entry_fields()[self.host.field.id]

    def _watched_fields(self) -> list[EntryField]:
        fields = self.host.entry_fields()
        # The slug field never feeds its own pattern.
        return [
            fields[name]
            for name in self.pattern.watched_field_names()
            if name in fields and name != self.host.field.id
        ]

    async def _recompute(self, locale: str) -> Any:
        return await self.update_slug(locale)

    def _on_external_change(self, value: Any) -> None:
        self.value = coerce_text(value)
        self._logger.log_external_change(self.host.field.locale)
