"""Publish-lock policy for automatic slug updates."""

from __future__ import annotations

from .models.datatypes import RecordSys


def is_locked(sys: RecordSys) -> bool:
    """Return whether a published record forbids automatic slug updates.

    A record is locked when it is published and unchanged since
    (`version == published_version + 1`) or published and edited since
    (`version >= published_version + 2`). Unpublished records are never locked.
    """

    if sys.published_version is None:
        return False
    published = sys.version == sys.published_version + 1
    changed = sys.version >= sys.published_version + 2
    return published or changed
