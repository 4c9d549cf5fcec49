"""Command-line interface for previewing slugs.

Responsibilities:
- Load a record snapshot and slug configuration from YAML.
- Compute slugs per locale with the same engine the editor integration uses.
- Report lock status for a record snapshot.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Mapping

import typer
import yaml

from .cli_rendering import echo_preview_rows, exit_with_command_error
from .config import ConfigLoader, SlugFieldConfig
from .errors import RecordFetchError, SlugStageError
from .host.contentful import ContentfulEntryFetcher
from .host.memory import InMemoryHost
from .lock_policy import is_locked
from .orchestrator import SlugFieldController
from .parsing import coerce_text
from .telemetry.logger import configure_cli_logging

app = typer.Typer(
    name="betterslugs",
    no_args_is_help=True,
    help="BetterSlugs CLI.",
)


@app.callback()
def configure(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Print slug engine events to stderr."),
    ] = False,
) -> None:
    """Preview pattern-driven slugs for record snapshots."""

    configure_cli_logging(verbose)


def _load_config(config_path: Path | None, pattern: str | None) -> SlugFieldConfig:
    """Load slug config from YAML and environment, applying a pattern override."""

    try:
        if config_path is not None:
            config = ConfigLoader.from_yaml(config_path)
        else:
            config = ConfigLoader.from_env()
    except FileNotFoundError as exc:
        raise SlugStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except (ValueError, yaml.YAMLError) as exc:
        raise SlugStageError(
            stage="config",
            detail=f"Invalid slug configuration: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc

    if pattern is not None:
        config = replace(config, pattern=pattern)
    if not config.pattern:
        raise SlugStageError(
            stage="config",
            detail="Slug pattern is empty.",
            hint="Pass `--pattern`, set `pattern` in `--config`, or set `BETTERSLUGS_PATTERN`.",
        )
    return config


def _load_record(record_path: Path) -> InMemoryHost:
    """Load a record snapshot YAML file into an in-memory host."""

    try:
        payload = yaml.safe_load(record_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SlugStageError(
            stage="record",
            detail=f"Record snapshot not found: `{record_path}`.",
            hint="Pass an existing record snapshot YAML path.",
        ) from exc
    except yaml.YAMLError as exc:
        raise SlugStageError(
            stage="record",
            detail=f"Record snapshot `{record_path}` is not valid YAML: {exc}",
            hint="Verify YAML syntax.",
        ) from exc
    if not isinstance(payload, Mapping):
        raise SlugStageError(
            stage="record",
            detail=f"Record snapshot `{record_path}` must contain a top-level mapping/object.",
        )

    try:
        delivery = ConfigLoader.delivery_from_env()
        fetcher = None
        if delivery is not None:
            fetcher = ContentfulEntryFetcher(
                space_id=delivery.space_id,
                access_token=delivery.access_token,
                environment_id=delivery.environment_id,
                base_url=delivery.base_url,
            )
        return InMemoryHost.from_mapping(payload, entry_fetcher=fetcher)
    except ValueError as exc:
        raise SlugStageError(
            stage="record",
            detail=str(exc),
            hint="See `locales`, `sys`, `slug_field`, `fields`, and `entries` keys.",
        ) from exc


async def _preview(
    host: InMemoryHost,
    config: SlugFieldConfig,
    locales: list[str],
    respect_lock: bool,
) -> list[tuple[str, str | None, str]]:
    """Compute slugs for each locale, returning `(locale, slug, current)` rows."""

    controller = SlugFieldController(host, config)
    slug_field = host.entry_fields()[host.field.id]
    rows: list[tuple[str, str | None, str]] = []
    for locale in locales:
        try:
            slug = await controller.update_slug(locale, force=not respect_lock)
        except RecordFetchError as exc:
            raise SlugStageError(
                stage="resolve",
                detail=f"Linked entry could not be fetched for `{locale}`: {exc}",
                hint="Check `entries` in the snapshot or the Contentful credentials.",
            ) from exc
        rows.append((locale, slug, coerce_text(slug_field.get_value(locale))))
    return rows


@app.command("preview")
def preview_command(
    record: Annotated[
        Path,
        typer.Argument(help="Path to a record snapshot YAML file."),
    ],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML slug configuration."),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", help="Slug pattern override, e.g. `[field:title]/[locale]`."),
    ] = None,
    locale: Annotated[
        str | None,
        typer.Option("--locale", help="Preview one locale instead of every available locale."),
    ] = None,
    respect_lock: Annotated[
        bool,
        typer.Option(
            "--respect-lock/--ignore-lock",
            help="Keep existing slugs of published records when the config locks them.",
        ),
    ] = False,
) -> None:
    """Compute the slug of a record snapshot for each locale."""

    try:
        config = _load_config(config_file, pattern)
        host = _load_record(record)
        locales = [locale] if locale else list(host.locales.available)
        rows = asyncio.run(_preview(host, config, locales, respect_lock))
    except Exception as exc:
        exit_with_command_error("preview", exc)

    echo_preview_rows(rows)


@app.command("lock-status")
def lock_status_command(
    record: Annotated[
        Path,
        typer.Argument(help="Path to a record snapshot YAML file."),
    ],
) -> None:
    """Print whether the publish lock applies to a record snapshot."""

    try:
        host = _load_record(record)
    except Exception as exc:
        exit_with_command_error("lock-status", exc)

    record_sys = host.entry_sys()
    state = "locked" if is_locked(record_sys) else "unlocked"
    published = record_sys.published_version
    typer.echo(
        f"{state} (version={record_sys.version}, "
        f"published_version={published if published is not None else 'none'})"
    )


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
