"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer
from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from collections.abc import Sequence

    from artifacturl.core.exceptions import ArtifactUrlError
    from artifacturl.core.models import ResolvedArtifact


def exit_with_error(error: ArtifactUrlError) -> NoReturn:
    """Echo an error with its recovery hint and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1) from None


def artifact_table(artifacts: Sequence[ResolvedArtifact]) -> Table:
    """Build a table of artifacts (version, country, URL).

    The newest artifact is highlighted in green.
    """
    table = Table()
    table.add_column("Version")
    table.add_column("Country")
    table.add_column("URL")

    for index, artifact in enumerate(artifacts):
        style = "green" if index == len(artifacts) - 1 else ""
        table.add_row(
            Text(str(artifact.version), style=style),
            artifact.country,
            artifact.url,
        )
    return table
