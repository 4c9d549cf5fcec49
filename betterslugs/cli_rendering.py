"""CLI output and error rendering helpers."""

from __future__ import annotations

from typing import NoReturn, Sequence

import typer

from .errors import SlugStageError


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, SlugStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_preview_rows(rows: Sequence[tuple[str, str | None, str]]) -> None:
    """Print one `locale: slug` line per previewed locale.

    Locked rows show the kept slug with a `(locked)` marker.
    """

    for locale, slug, current in rows:
        if slug is None:
            typer.echo(f"{locale}: {current or '(empty)'} (locked)")
        else:
            typer.echo(f"{locale}: {slug}")
