"""Unit tests for structured slug engine logging."""

from __future__ import annotations

import io

from betterslugs.telemetry.logger import SlugLogger


def test_slug_logger_emits_sorted_sanitized_context() -> None:
    """Lines should carry level, stage, event, and sorted sanitized context."""

    buffer = io.StringIO()
    logger = SlugLogger(sink=buffer)
    try:
        logger.log_written("en-US", "news views/hello", forced=True)
        logger.log_skipped("de-DE", "locked")
    finally:
        logger.close()

    assert buffer.getvalue().splitlines() == [
        "[slug] level=INFO stage=update event=written forced=True locale=en-US slug=news_views/hello",
        "[slug] level=INFO stage=update event=skipped locale=de-DE reason=locked",
    ]


def test_slug_logger_sink_respects_level_and_close() -> None:
    """DEBUG events should be filtered at INFO, and nothing should arrive after close."""

    buffer = io.StringIO()
    logger = SlugLogger(sink=buffer)
    logger.log_scheduled("title", "en-US")
    logger.log_failure("update", "en-US", "RecordFetchError")
    logger.close()
    logger.log_stale("en-US")

    assert buffer.getvalue().splitlines() == [
        "[slug] level=ERROR stage=update event=failure error_type=RecordFetchError locale=en-US",
    ]


def test_slug_logger_sinks_only_receive_own_records() -> None:
    """A logger sink should ignore records from other loguru users."""

    from loguru import logger as global_logger

    buffer = io.StringIO()
    logger = SlugLogger(sink=buffer)
    try:
        global_logger.info("unrelated application message")
        logger.log_unmounted()
    finally:
        logger.close()

    assert buffer.getvalue().splitlines() == ["[slug] level=INFO stage=mount event=released"]
