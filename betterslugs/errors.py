"""Domain exceptions for slug computation and CLI diagnostics."""

from __future__ import annotations


class SlugStageError(RuntimeError):
    """Raised when a configuration or preview stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped slug error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class RecordFetchError(RuntimeError):
    """Raised when a linked record cannot be fetched from the record store."""

    def __init__(
        self,
        message: str,
        *,
        entry_id: str | None = None,
        failure_kind: str = "unknown",
        status_code: int | None = None,
    ) -> None:
        """Initialize fetch failure metadata for update-level diagnostics."""

        super().__init__(message)
        self.entry_id = entry_id
        self.failure_kind = failure_kind
        self.status_code = status_code
