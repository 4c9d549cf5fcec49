"""Contentful HTTP client for fetching linked entries.

Responsibilities:
- Fetch single entries with all locales from the delivery or preview API.
- Map transport and HTTP failures to `RecordFetchError` with a failure kind.
- Expose an awaitable fetch suitable for `InMemoryHost(entry_fetcher=...)`.
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Mapping

import requests

from ..errors import RecordFetchError


class ContentfulEntryFetcher:
    """Fetch entries from a Contentful space over its REST API."""

    _MAX_MESSAGE_CHARS = 180

    def __init__(
        self,
        *,
        space_id: str,
        access_token: str,
        environment_id: str = "master",
        base_url: str = "https://cdn.contentful.com",
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize space coordinates and HTTP settings."""

        self.space_id = space_id.strip()
        self.access_token = access_token.strip()
        self.environment_id = environment_id.strip() or "master"
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def entry_url(self, entry_id: str) -> str:
        """Return the REST endpoint for one entry."""

        return (
            f"{self.base_url}/spaces/{self.space_id}"
            f"/environments/{self.environment_id}/entries/{entry_id}"
        )

    def fetch_entry_sync(self, entry_id: str) -> Mapping[str, Any]:
        """Fetch one entry with every locale and return its decoded payload."""

        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            response = requests.get(
                self.entry_url(entry_id),
                headers=headers,
                params={"locale": "*"},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise self._http_error_to_fetch_error(entry_id, exc) from exc
        except requests.Timeout as exc:
            raise RecordFetchError(
                f"Fetching entry `{entry_id}` timed out.",
                entry_id=entry_id,
                failure_kind="timeout",
            ) from exc
        except requests.RequestException as exc:
            raise RecordFetchError(
                f"Fetching entry `{entry_id}` failed: {self._short_message(str(exc))}",
                entry_id=entry_id,
                failure_kind="transport",
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RecordFetchError(
                f"Entry `{entry_id}` response is not valid JSON.",
                entry_id=entry_id,
                failure_kind="malformed",
            ) from exc

        if not isinstance(payload, Mapping):
            raise RecordFetchError(
                f"Entry `{entry_id}` response is not a JSON object.",
                entry_id=entry_id,
                failure_kind="malformed",
            )
        return payload

    async def __call__(self, entry_id: str) -> Mapping[str, Any]:
        """Fetch one entry without blocking the event loop."""

        return await asyncio.to_thread(self.fetch_entry_sync, entry_id)

    def _http_error_to_fetch_error(
        self, entry_id: str, exc: requests.HTTPError
    ) -> RecordFetchError:
        """Classify an HTTP failure into a fetch error."""

        response = exc.response
        status_code = response.status_code if response is not None else None
        if status_code == 404:
            failure_kind = "not_found"
        elif status_code in (401, 403):
            failure_kind = "unauthorized"
        else:
            failure_kind = "http"

        message = self._extract_message(response)
        detail = f"Fetching entry `{entry_id}` failed with HTTP {status_code}"
        if message:
            detail = f"{detail}: {message}"
        return RecordFetchError(
            detail,
            entry_id=entry_id,
            failure_kind=failure_kind,
            status_code=status_code,
        )

    @classmethod
    def _extract_message(cls, response: requests.Response | None) -> str:
        """Extract a concise message from a Contentful error body."""

        if response is None:
            return ""
        try:
            body = bytes(response.content).decode("utf-8", errors="replace").strip()
        except (TypeError, ValueError):
            return ""
        if not body:
            return ""
        try:
            payload = json.loads(body)
        except json.JSONDecodeError:
            return cls._short_message(cls._redact_tokens(body))
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return cls._short_message(cls._redact_tokens(payload["message"]))
        return cls._short_message(cls._redact_tokens(body))

    @staticmethod
    def _redact_tokens(text: str) -> str:
        """Redact bearer tokens from error content."""

        return re.sub(r"(?i)bearer\s+[A-Za-z0-9._-]{12,}", "Bearer [redacted-token]", text)

    @classmethod
    def _short_message(cls, text: str) -> str:
        """Normalize and cap message length."""

        compact = " ".join(text.split())
        if len(compact) <= cls._MAX_MESSAGE_CHARS:
            return compact
        return f"{compact[: cls._MAX_MESSAGE_CHARS - 1]}..."
