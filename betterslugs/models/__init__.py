"""Shared typed data models for slug computation.

This package contains dataclasses used across parser, assembler, and host
modules to avoid cross-module coupling and circular imports.
"""

from .datatypes import (
    FieldToken,
    LiteralSegment,
    LocaleSettings,
    LocaleToken,
    RecordSys,
    Segment,
    SlugPattern,
)

__all__ = [
    "FieldToken",
    "LiteralSegment",
    "LocaleSettings",
    "LocaleToken",
    "RecordSys",
    "Segment",
    "SlugPattern",
]
