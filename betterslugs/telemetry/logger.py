"""Structured slug engine logging.

Responsibilities:
- Emit concise, deterministic event lines for mount, scheduling, and updates.
- Route records through `loguru`, optionally to a dedicated filtered sink.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from loguru import logger as _loguru_logger

_COMPONENT = "betterslugs"


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def _is_own_record(record: dict[str, Any]) -> bool:
    return record["extra"].get("component") == _COMPONENT


class SlugLogger:
    """Emit deterministic event logs for slug engine activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Bind the component logger and attach an optional dedicated sink."""

        self._logger = _loguru_logger.bind(component=_COMPONENT)
        self._sink_id: int | None = None
        if sink is not None:
            self._sink_id = _loguru_logger.add(
                sink,
                format="{message}",
                level=level,
                colorize=False,
                filter=_is_own_record,
            )

    def close(self) -> None:
        """Detach the dedicated sink, if one was attached."""

        if self._sink_id is not None:
            _loguru_logger.remove(self._sink_id)
            self._sink_id = None

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured log line."""

        line = f"[slug] level={level} stage={stage} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def log_mounted(self, field_count: int, subscription_count: int) -> None:
        """Emit a mount event with listener counts."""

        self._emit(
            "INFO",
            "complete",
            "mount",
            fields=field_count,
            subscriptions=subscription_count,
        )

    def log_unmounted(self) -> None:
        """Emit an unmount event."""

        self._emit("INFO", "released", "mount")

    def log_scheduled(self, field_name: str, locale: str) -> None:
        """Emit a debounced recomputation scheduling event."""

        self._emit("DEBUG", "scheduled", "schedule", field=field_name, locale=locale)

    def log_skipped(self, locale: str, reason: str) -> None:
        """Emit a suppressed-update event."""

        self._emit("INFO", "skipped", "update", locale=locale, reason=reason)

    def log_written(self, locale: str, slug: str, forced: bool) -> None:
        """Emit a slug write event."""

        self._emit("INFO", "written", "update", locale=locale, slug=slug, forced=forced)

    def log_stale(self, locale: str) -> None:
        """Emit a superseded-update event."""

        self._emit("INFO", "stale", "update", locale=locale)

    def log_failure(self, stage: str, locale: str, error_type: str) -> None:
        """Emit a failure event without sensitive payload details."""

        self._emit("ERROR", "failure", stage, locale=locale, error_type=error_type)

    def log_external_change(self, locale: str) -> None:
        """Emit an externally-originated slug change event."""

        self._emit("DEBUG", "mirrored", "external", locale=locale)

    def log_user_input(self, locale: str, cleared: bool) -> None:
        """Emit a manual slug edit event."""

        self._emit("INFO", "cleared" if cleared else "written", "input", locale=locale)


def _write_stderr(message: str) -> None:
    sys.stderr.write(message)


def configure_cli_logging(verbose: bool, sink: TextIO | None = None) -> None:
    """Replace loguru handlers with one stderr handler for CLI runs."""

    _loguru_logger.remove()
    _loguru_logger.add(
        sink if sink is not None else _write_stderr,
        format="{message}",
        level="DEBUG" if verbose else "WARNING",
        colorize=False,
    )
