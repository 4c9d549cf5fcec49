"""Change-driven, per-locale debounced slug recomputation.

Responsibilities:
- Subscribe to every watched field in every locale it holds.
- Debounce recomputation per locale with independent timers.
- Mirror externally-originated slug changes without recomputing.
- Release timers, subscriptions, and in-flight tasks together on close.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, Iterable

from .host.protocols import EntryField, SlugField, Unsubscribe
from .telemetry.logger import SlugLogger

Recompute = Callable[[str], Coroutine[Any, Any, Any]]


class ChangeScheduler:
    """Schedule debounced recomputations keyed by locale."""

    def __init__(
        self,
        recompute: Recompute,
        *,
        delay_seconds: float = 0.5,
        logger: SlugLogger | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._recompute = recompute
        self.delay_seconds = delay_seconds
        self._logger = logger or SlugLogger()
        self._loop = loop
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._subscriptions: list[Unsubscribe] = []
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    @property
    def pending_locales(self) -> tuple[str, ...]:
        """Return locales with a pending debounce timer."""

        return tuple(self._timers)

    def watch_fields(self, fields: Iterable[EntryField]) -> None:
        """Subscribe to changes of each field in every locale it holds."""

        for entry_field in fields:
            for locale in entry_field.locales:
                self._subscriptions.append(
                    entry_field.on_value_changed(
                        locale, self._change_listener(entry_field.id, locale)
                    )
                )

    def watch_external(self, slug_field: SlugField, on_change: Callable[[Any], None]) -> None:
        """Subscribe the display mirror to slug changes made elsewhere."""

        self._subscriptions.append(slug_field.on_value_changed(on_change))

    def trigger(self, locale: str) -> None:
        """Restart the debounce timer for `locale`."""

        if self._closed:
            return
        pending = self._timers.pop(locale, None)
        if pending is not None:
            pending.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._timers[locale] = loop.call_later(self.delay_seconds, self._fire, locale)

    def close(self) -> None:
        """Cancel pending timers and tasks and release all subscriptions."""

        self._closed = True
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        while self._subscriptions:
            unsubscribe = self._subscriptions.pop()
            unsubscribe()
        for task in list(self._tasks):
            task.cancel()

    async def drain(self) -> None:
        """Wait for in-flight recomputation tasks to finish."""

        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _change_listener(self, field_name: str, locale: str) -> Callable[[Any], None]:
        def _on_change(_value: Any) -> None:
            self._logger.log_scheduled(field_name, locale)
            self.trigger(locale)

        return _on_change

    def _fire(self, locale: str) -> None:
        self._timers.pop(locale, None)
        if self._closed:
            return
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._recompute(locale))
        self._tasks.add(task)
        task.add_done_callback(lambda done: self._finish(done, locale))

    def _finish(self, task: asyncio.Task[Any], locale: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.log_failure("update", locale, type(error).__name__)
